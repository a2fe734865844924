"""Container service: creation, access and file management."""

from typing import List, Optional

from common.constants import (
    CONTAINER_NAME_MAX_LENGTH,
    MAX_FILES_PER_UPLOAD,
    RESERVED_CONTAINER_NAMES,
)
from common.logging_config import get_logger
from codeshare import config
from codeshare.auth import hash_secret
from codeshare.codes import CodeGenerator
from codeshare.exceptions import (
    CodeSpaceExhaustedError,
    ContainerNotFoundError,
    DuplicateCodeError,
    FileEntryNotFoundError,
    ValidationError,
)
from codeshare.repositories.record_store import RecordStore
from codeshare.services.access_guard import AccessGuard
from codeshare.types import Container, FileEntry, NewFile
from codeshare.utils import utc_now

logger = get_logger(__name__)


def validate_container_name(name: str) -> None:
    """
    Reject names that cannot be addressed as one URL path segment.

    Raises:
        ValidationError: Blank, too long, reserved, or containing "/"
    """
    if not name.strip():
        raise ValidationError("Container name is required")
    if len(name) > CONTAINER_NAME_MAX_LENGTH:
        raise ValidationError(f"Container name is longer than {CONTAINER_NAME_MAX_LENGTH} characters")
    if "/" in name or name in RESERVED_CONTAINER_NAMES:
        raise ValidationError(f"Container name '{name}' is not allowed")


class ContainerService:
    def __init__(
        self,
        store: RecordStore,
        code_generator: CodeGenerator,
        guard: AccessGuard,
        max_attempts: Optional[int] = None,
    ):
        self.store = store
        self.code_generator = code_generator
        self.guard = guard
        self.max_attempts = max_attempts if max_attempts is not None else config.CODE_MAX_ATTEMPTS

    def create_container(self, name: str, secret: str) -> Container:
        validate_container_name(name)

        logger.info(f"Creating container: {name}")
        return self.store.put_container(name, hash_secret(secret), utc_now())

    def open_container(self, name: str, secret: str) -> Container:
        container = self.guard.authorize(name, secret)
        logger.debug(f"Container opened: {name} [files={len(container.files)}]")
        return container

    def upload_to_container(self, name: str, secret: str, files: List[NewFile]) -> Container:
        """
        Append files to a container, minting a fresh per-file code for each.

        The append is all-or-nothing; on a code collision the whole batch is
        retried with new codes.

        Args:
            name: Container name
            secret: Container secret
            files: Files to append, in order

        Returns:
            The container with its updated file list

        Raises:
            ContainerNotFoundError: If the container does not exist
            InvalidSecretError: If the secret does not match
            ValidationError: If files is empty or exceeds the per-upload limit
            CodeSpaceExhaustedError: If every minted batch collided
        """
        authorized = self.guard.authorize(name, secret)

        if not files:
            raise ValidationError("At least one file is required")
        if len(files) > MAX_FILES_PER_UPLOAD:
            raise ValidationError(f"At most {MAX_FILES_PER_UPLOAD} files can be uploaded at once")

        for attempt in range(1, self.max_attempts + 1):
            uploaded_at = utc_now()
            codes = self.code_generator.generate_batch(len(files))
            entries = [
                FileEntry(
                    code=code,
                    name=f.name,
                    url=f.url,
                    size=f.size,
                    uploaded_at=uploaded_at,
                    media_type=f.media_type,
                )
                for code, f in zip(codes, files)
            ]
            try:
                return self.store.append_files_to_container(
                    name, entries, expected_secret_hash=authorized.secret_hash
                )
            except DuplicateCodeError:
                logger.warning(f"Code collision while uploading to container {name} [attempt={attempt}]")

        logger.error(f"Gave up minting file codes for container {name} after {self.max_attempts} attempts")
        raise CodeSpaceExhaustedError("Could not allocate unused file codes")

    def remove_file(self, name: str, file_code: str, secret: str) -> Container:
        authorized = self.guard.authorize(name, secret)

        removed = self.store.remove_file_from_container(
            name, file_code, expected_secret_hash=authorized.secret_hash
        )
        if not removed:
            raise FileEntryNotFoundError(f"File '{file_code}' not found in container '{name}'")

        container = self.store.get_container_by_name(name)
        if container is None:
            raise ContainerNotFoundError(f"Container '{name}' not found")
        return container

    def delete_container(self, name: str) -> None:
        if not self.store.delete_container(name):
            raise ContainerNotFoundError(f"Container '{name}' not found")

    def list_containers(self) -> List[Container]:
        return self.store.list_containers()
