"""Tests for CodeShare API endpoints."""

import pytest
from fastapi.testclient import TestClient

from common.constants import MASKED_CONTAINER_LABEL, MAX_FILES_PER_UPLOAD
from codeshare.database import Database
from codeshare.main import create_app
from conftest import file_payload


def create_container(client, name="box1", secret="1234"):
    return client.post('/containers', json={'name': name, 'secret': secret})


def upload(client, name="box1", secret="1234", count=2, prefix="file"):
    return client.post(f'/containers/{name}/files', json={
        'secret': secret,
        'files': file_payload(count, prefix),
    })


def test_root_endpoint(client):
    response = client.get('/')
    assert response.status_code == 200
    assert response.json()['status'] == 'running'


def test_health_and_ready(client):
    assert client.get('/health').json()['status'] == 'healthy'
    response = client.get('/ready')
    assert response.status_code == 200
    assert response.json() == {'ready': True, 'database': 'ok'}


def test_request_id_header(client):
    response = client.get('/health')
    assert response.headers.get('X-Request-ID')


def test_unknown_route_has_error_code(client):
    response = client.get('/no-such-route')
    assert response.status_code == 404
    assert response.json() == {'detail': 'Not Found', 'code': 'NOT_FOUND'}


def test_wrong_method_has_error_code(client):
    response = client.put('/shares')
    assert response.status_code == 405
    assert response.json()['code'] == 'METHOD_NOT_ALLOWED'


class TestCors:
    """Browser origins on the allowlist may call the API; others may not."""

    @pytest.fixture
    def cors_client(self, tmp_path):
        app = create_app(
            Database(str(tmp_path / 'cors.db')),
            cors_origins=['https://app.example.com'],
        )
        with TestClient(app) as test_client:
            yield test_client

    def test_preflight_from_allowed_origin(self, cors_client):
        response = cors_client.options('/shares', headers={
            'Origin': 'https://app.example.com',
            'Access-Control-Request-Method': 'POST',
            'Access-Control-Request-Headers': 'content-type',
        })
        assert response.status_code == 200
        assert response.headers['access-control-allow-origin'] == 'https://app.example.com'
        assert response.headers['access-control-allow-credentials'] == 'true'

    def test_preflight_from_unknown_origin(self, cors_client):
        response = cors_client.options('/shares', headers={
            'Origin': 'https://evil.example.net',
            'Access-Control-Request-Method': 'POST',
        })
        assert response.status_code == 400
        assert 'access-control-allow-origin' not in response.headers

    def test_simple_request_exposes_request_id(self, cors_client):
        response = cors_client.get('/health', headers={'Origin': 'https://app.example.com'})
        assert response.headers['access-control-allow-origin'] == 'https://app.example.com'
        assert 'X-Request-ID' in response.headers['access-control-expose-headers']


class TestShareEndpoints:

    def test_submit_share(self, client):
        response = client.post('/shares', json={
            'uploader_name': 'alice',
            'files': file_payload(2),
            'total_size': 300,
        })
        assert response.status_code == 201
        data = response.json()
        assert len(data['code']) == 6
        assert data['uploader_name'] == 'alice'
        assert data['total_size'] == 300
        assert [f['name'] for f in data['files']] == ['file0.txt', 'file1.txt']

    def test_submit_with_code_echoes_it(self, client):
        response = client.post('/shares', json={
            'uploader_name': 'alice',
            'files': file_payload(1),
            'code': '735586',
        })
        assert response.status_code == 201
        assert response.json()['code'] == '735586'

    def test_submit_duplicate_code(self, client):
        body = {'uploader_name': 'alice', 'files': file_payload(1), 'code': '735586'}
        client.post('/shares', json=body)
        response = client.post('/shares', json=body)
        assert response.status_code == 409
        assert response.json()['code'] == 'DUPLICATE_CODE'

    def test_submit_empty_files(self, client):
        response = client.post('/shares', json={'uploader_name': 'alice', 'files': []})
        assert response.status_code == 400
        assert response.json()['code'] == 'VALIDATION_ERROR'

    def test_submit_missing_fields(self, client):
        response = client.post('/shares', json={'files': file_payload(1)})
        assert response.status_code == 400
        assert response.json()['code'] == 'VALIDATION_ERROR'

    def test_submit_unknown_field_rejected(self, client):
        response = client.post('/shares', json={
            'uploader_name': 'alice',
            'files': file_payload(1),
            'type': 'general',
        })
        assert response.status_code == 400

    def test_submit_negative_size_rejected(self, client):
        files = file_payload(1)
        files[0]['size'] = -1
        response = client.post('/shares', json={'uploader_name': 'alice', 'files': files})
        assert response.status_code == 400

    def test_resolve_share(self, client):
        code = client.post('/shares', json={
            'uploader_name': 'alice',
            'files': file_payload(3),
        }).json()['code']

        response = client.get(f'/codes/{code}')
        assert response.status_code == 200
        data = response.json()
        assert data['scope'] == 'share'
        assert data['uploader_name'] == 'alice'
        assert [f['url'] for f in data['files']] == [f['url'] for f in file_payload(3)]

    def test_resolve_unknown(self, client):
        response = client.get('/codes/123456')
        assert response.status_code == 404
        assert response.json()['code'] == 'CODE_NOT_FOUND'

    def test_list_shares_newest_first(self, client):
        first = client.post('/shares', json={'uploader_name': 'a', 'files': file_payload(1)}).json()['code']
        second = client.post('/shares', json={'uploader_name': 'b', 'files': file_payload(1)}).json()['code']

        response = client.get('/shares')
        assert response.status_code == 200
        assert [s['code'] for s in response.json()['shares']] == [second, first]

    def test_delete_share(self, client):
        code = client.post('/shares', json={'uploader_name': 'a', 'files': file_payload(1)}).json()['code']

        response = client.delete(f'/shares/{code}')
        assert response.status_code == 200
        assert response.json() == {'success': True, 'code': code}
        assert client.get(f'/codes/{code}').status_code == 404

    def test_delete_missing_share(self, client):
        response = client.delete('/shares/123456')
        assert response.status_code == 404
        assert response.json()['code'] == 'SHARE_NOT_FOUND'


class TestContainerEndpoints:

    def test_create_container(self, client):
        response = create_container(client)
        assert response.status_code == 201
        data = response.json()
        assert data['name'] == 'box1'
        assert data['files'] == []
        assert 'secret' not in data
        assert 'secret_hash' not in data

    def test_create_container_conflict(self, client):
        create_container(client)
        response = create_container(client)
        assert response.status_code == 409
        assert response.json()['code'] == 'CONTAINER_EXISTS'

    def test_create_container_with_slash_rejected(self, client):
        response = create_container(client, name="team/a")
        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"
        assert client.get("/containers").json()["containers"] == []

    def test_create_container_dot_name_rejected(self, client):
        response = create_container(client, name="..")
        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_container_name_round_trips_through_path(self, client):
        assert create_container(client, name="team a").status_code == 201
        assert upload(client, name="team a", count=1).status_code == 200
        assert client.delete("/containers/team a").status_code == 200
        assert create_container(client, name="team a").status_code == 201

    def test_create_container_missing_secret(self, client):
        response = client.post('/containers', json={'name': 'box1'})
        assert response.status_code == 400

    def test_open_container(self, client):
        create_container(client)
        upload(client)
        response = client.post('/containers/box1/open', json={'secret': '1234'})
        assert response.status_code == 200
        assert response.json()['file_count'] == 2

    def test_open_wrong_secret(self, client):
        create_container(client)
        upload(client)
        response = client.post('/containers/box1/open', json={'secret': 'wrong-secret'})
        assert response.status_code == 401
        body = response.json()
        assert body['code'] == 'INVALID_SECRET'
        assert 'files' not in body
        assert 'file0' not in response.text

    def test_open_missing(self, client):
        response = client.post('/containers/ghost/open', json={'secret': '1234'})
        assert response.status_code == 404
        assert response.json()['code'] == 'CONTAINER_NOT_FOUND'

    def test_upload_twice(self, client):
        create_container(client)
        upload(client, prefix='a')
        response = upload(client, prefix='b')
        assert response.status_code == 200
        files = response.json()['files']
        assert len(files) == 4
        assert len({f['code'] for f in files}) == 4

    def test_upload_wrong_secret(self, client):
        create_container(client)
        assert upload(client, secret='nope').status_code == 401

    def test_upload_missing_container(self, client):
        assert upload(client, name='ghost').status_code == 404

    def test_upload_empty_files(self, client):
        create_container(client)
        response = client.post('/containers/box1/files', json={'secret': '1234', 'files': []})
        assert response.status_code == 400

    def test_upload_too_many_files(self, client):
        create_container(client)
        response = client.post('/containers/box1/files', json={
            'secret': '1234',
            'files': file_payload(MAX_FILES_PER_UPLOAD + 1),
        })
        assert response.status_code == 400
        assert response.json()['code'] == 'VALIDATION_ERROR'

    def test_resolve_container_file_is_masked(self, client):
        create_container(client, name='my-private-box')
        files = upload(client, name='my-private-box', count=2).json()['files']

        response = client.get(f"/codes/{files[0]['code']}")
        assert response.status_code == 200
        data = response.json()
        assert data['scope'] == 'container'
        assert data['uploader_name'] == MASKED_CONTAINER_LABEL
        assert len(data['files']) == 1
        assert data['files'][0]['code'] == files[0]['code']
        assert 'my-private-box' not in response.text

    def test_remove_file(self, client):
        create_container(client)
        files = upload(client, count=2).json()['files']

        response = client.request(
            'DELETE',
            f"/containers/box1/files/{files[0]['code']}",
            json={'secret': '1234'},
        )
        assert response.status_code == 200
        assert [f['code'] for f in response.json()['files']] == [files[1]['code']]

    def test_remove_unknown_file(self, client):
        create_container(client)
        upload(client, count=2)

        response = client.request('DELETE', '/containers/box1/files/999999', json={'secret': '1234'})
        assert response.status_code == 404
        assert response.json()['code'] == 'FILE_NOT_FOUND'
        opened = client.post('/containers/box1/open', json={'secret': '1234'}).json()
        assert opened['file_count'] == 2

    def test_remove_file_wrong_secret(self, client):
        create_container(client)
        files = upload(client, count=1).json()['files']

        response = client.request(
            'DELETE',
            f"/containers/box1/files/{files[0]['code']}",
            json={'secret': 'bad'},
        )
        assert response.status_code == 401

    def test_delete_container_hides_former_codes(self, client):
        create_container(client)
        files = upload(client, count=3).json()['files']

        response = client.delete('/containers/box1')
        assert response.status_code == 200
        assert response.json() == {'success': True, 'name': 'box1'}

        for f in files:
            assert client.get(f"/codes/{f['code']}").status_code == 404
        assert create_container(client).status_code == 201

    def test_delete_missing_container(self, client):
        assert client.delete('/containers/ghost').status_code == 404

    def test_list_containers(self, client):
        create_container(client, name='first')
        create_container(client, name='second')
        upload(client, name='first', count=1)

        response = client.get('/containers')
        assert response.status_code == 200
        containers = response.json()['containers']
        assert [c['name'] for c in containers] == ['second', 'first']
        assert containers[1]['file_count'] == 1
        assert all('secret_hash' not in c for c in containers)


class TestStoreFailure:
    """A database that cannot be opened maps to 500, and /ready reports it."""

    def test_list_shares_store_error(self, tmp_path):
        app = create_app(Database(str(tmp_path)))
        client = TestClient(app)

        response = client.get('/shares')
        assert response.status_code == 500
        assert response.json()['code'] == 'STORE_ERROR'

    def test_list_containers_store_error(self, tmp_path):
        client = TestClient(create_app(Database(str(tmp_path))))
        assert client.get('/containers').status_code == 500

    def test_ready_reports_database_error(self, tmp_path):
        client = TestClient(create_app(Database(str(tmp_path))))
        response = client.get('/ready')
        assert response.status_code == 503
        assert response.json()['ready'] is False
