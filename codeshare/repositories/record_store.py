"""Record store combining the share and container collections."""

from datetime import datetime
from typing import List, Optional

from codeshare.database import Database
from codeshare.repositories.code_lookup import find_code_scope
from codeshare.repositories.container_repository import ContainerRepository
from codeshare.repositories.share_repository import ShareRepository
from codeshare.types import Container, FileEntry, ShareRecord


class RecordStore:
    """
    Key-addressed storage for share records (by code) and containers (by name).

    Every operation is atomic for its single target. Container files are kept
    only under their container; the resolver searches both collections rather
    than mirroring container uploads into the share collection.
    """

    def __init__(self, db: Database):
        self.db = db
        self.shares = ShareRepository(db)
        self.containers = ContainerRepository(db)

    def put_share_record(self, record: ShareRecord) -> ShareRecord:
        return self.shares.create_share_record(record)

    def get_share_record_by_code(self, code: str) -> Optional[ShareRecord]:
        return self.shares.get_by_code(code)

    def list_share_records(self) -> List[ShareRecord]:
        return self.shares.list_all()

    def delete_share_record_by_code(self, code: str) -> bool:
        return self.shares.delete_by_code(code)

    def put_container(self, name: str, secret_hash: str, created_at: datetime) -> Container:
        return self.containers.create_container(name, secret_hash, created_at)

    def get_container_by_name(self, name: str) -> Optional[Container]:
        return self.containers.get_by_name(name)

    def get_container_containing_file_code(self, code: str) -> Optional[Container]:
        return self.containers.get_by_file_code(code)

    def append_files_to_container(
        self,
        name: str,
        entries: List[FileEntry],
        expected_secret_hash: Optional[str] = None,
    ) -> Container:
        return self.containers.append_files(name, entries, expected_secret_hash)

    def remove_file_from_container(
        self,
        name: str,
        file_code: str,
        expected_secret_hash: Optional[str] = None,
    ) -> bool:
        return self.containers.remove_file(name, file_code, expected_secret_hash)

    def delete_container(self, name: str) -> bool:
        return self.containers.delete_container(name)

    def list_containers(self) -> List[Container]:
        return self.containers.list_all()

    def is_code_in_use(self, code: str) -> bool:
        with self.db.connect() as conn:
            return find_code_scope(conn, code) is not None

    def ping(self) -> bool:
        return self.db.ping()
