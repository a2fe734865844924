"""Share service for ungrouped, code-addressed uploads."""

from typing import List, Optional

from common.constants import MAX_FILES_PER_UPLOAD
from common.logging_config import get_logger
from codeshare import config
from codeshare.codes import CodeGenerator, is_valid_code
from codeshare.exceptions import (
    CodeSpaceExhaustedError,
    DuplicateCodeError,
    ShareNotFoundError,
    ValidationError,
)
from codeshare.repositories.record_store import RecordStore
from codeshare.types import FileEntry, NewFile, ShareRecord
from codeshare.utils import utc_now

logger = get_logger(__name__)


class ShareService:
    def __init__(
        self,
        store: RecordStore,
        code_generator: CodeGenerator,
        max_attempts: Optional[int] = None,
    ):
        self.store = store
        self.code_generator = code_generator
        self.max_attempts = max_attempts if max_attempts is not None else config.CODE_MAX_ATTEMPTS

    def submit_share(
        self,
        uploader_name: str,
        files: List[NewFile],
        code: Optional[str] = None,
        total_size: Optional[int] = None,
    ) -> ShareRecord:
        """
        Persist a share record under a client-supplied or freshly minted code.

        Args:
            uploader_name: Display name of the uploader
            files: Files to bundle, in order
            code: Optional client-chosen code; a taken code is a conflict
            total_size: Optional byte total; defaults to the sum of file sizes

        Returns:
            The stored share record

        Raises:
            ValidationError: Empty name, empty or oversized file list, malformed code
            DuplicateCodeError: If the client-supplied code is taken
            CodeSpaceExhaustedError: If every minted code collided
        """
        uploader_name = uploader_name.strip()
        if not uploader_name:
            raise ValidationError("Uploader name is required")
        if not files:
            raise ValidationError("A share must contain at least one file")
        if len(files) > MAX_FILES_PER_UPLOAD:
            raise ValidationError(f"At most {MAX_FILES_PER_UPLOAD} files can be shared at once")
        if total_size is None:
            total_size = sum(f.size for f in files)

        if code is not None:
            if not is_valid_code(code):
                raise ValidationError(f"Code '{code}' is not a valid share code")
            return self.store.put_share_record(
                self._build_record(code, uploader_name, files, total_size)
            )

        for attempt in range(1, self.max_attempts + 1):
            candidate = self.code_generator.generate()
            try:
                return self.store.put_share_record(
                    self._build_record(candidate, uploader_name, files, total_size)
                )
            except DuplicateCodeError:
                logger.warning(f"Code collision while minting share code [attempt={attempt}]")

        logger.error(f"Gave up minting a share code after {self.max_attempts} attempts")
        raise CodeSpaceExhaustedError("Could not allocate an unused share code")

    def _build_record(
        self,
        code: str,
        uploader_name: str,
        files: List[NewFile],
        total_size: int,
    ) -> ShareRecord:
        created_at = utc_now()
        return ShareRecord(
            code=code,
            uploader_name=uploader_name,
            files=[
                FileEntry(
                    code=code,
                    name=f.name,
                    url=f.url,
                    size=f.size,
                    uploaded_at=created_at,
                    media_type=f.media_type,
                )
                for f in files
            ],
            total_size=total_size,
            created_at=created_at,
        )

    def list_shares(self) -> List[ShareRecord]:
        return self.store.list_share_records()

    def delete_share(self, code: str) -> None:
        if not self.store.delete_share_record_by_code(code):
            raise ShareNotFoundError(f"Share '{code}' not found")
