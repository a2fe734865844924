"""FastAPI dependencies wiring services to the application's store handle."""

from fastapi import Depends, Request

from codeshare.codes import CodeGenerator
from codeshare.repositories.record_store import RecordStore
from codeshare.services.access_guard import AccessGuard
from codeshare.services.container_service import ContainerService
from codeshare.services.resolver import Resolver
from codeshare.services.share_service import ShareService


def get_record_store(request: Request) -> RecordStore:
    return RecordStore(request.app.state.database)


def get_code_generator(request: Request) -> CodeGenerator:
    return request.app.state.code_generator


def get_share_service(
    store: RecordStore = Depends(get_record_store),
    code_generator: CodeGenerator = Depends(get_code_generator),
) -> ShareService:
    return ShareService(store, code_generator)


def get_resolver(store: RecordStore = Depends(get_record_store)) -> Resolver:
    return Resolver(store)


def get_container_service(
    store: RecordStore = Depends(get_record_store),
    code_generator: CodeGenerator = Depends(get_code_generator),
) -> ContainerService:
    return ContainerService(store, code_generator, AccessGuard(store))
