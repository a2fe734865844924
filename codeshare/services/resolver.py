"""Code resolution across share records and containers."""

from common.constants import MASKED_CONTAINER_LABEL
from common.logging_config import get_logger
from codeshare.exceptions import CodeNotFoundError
from codeshare.repositories.record_store import RecordStore
from codeshare.types import SCOPE_CONTAINER, SCOPE_SHARE, ResolvedView

logger = get_logger(__name__)


class Resolver:
    def __init__(self, store: RecordStore):
        self.store = store

    def resolve(self, code: str) -> ResolvedView:
        """
        Look a code up in the share collection first, then in containers.

        A container hit is masked: the container's name is replaced by a
        generic label and only the matching file entry is returned, in the
        same shape as a share record.

        Args:
            code: Share code or per-file container code

        Returns:
            Normalized view of the files behind the code

        Raises:
            CodeNotFoundError: If neither collection knows the code
        """
        record = self.store.get_share_record_by_code(code)
        if record is not None:
            logger.debug(f"Code resolved to share record [code={code}]")
            return ResolvedView(
                code=record.code,
                scope=SCOPE_SHARE,
                uploader_name=record.uploader_name,
                files=list(record.files),
                total_size=record.total_size,
                created_at=record.created_at,
            )

        container = self.store.get_container_containing_file_code(code)
        if container is not None:
            entry = next((f for f in container.files if f.code == code), None)
            if entry is not None:
                logger.debug(f"Code resolved to a container file [code={code}]")
                return ResolvedView(
                    code=entry.code,
                    scope=SCOPE_CONTAINER,
                    uploader_name=MASKED_CONTAINER_LABEL,
                    files=[entry],
                    total_size=entry.size,
                    created_at=entry.uploaded_at,
                )

        logger.debug(f"Code not found [code={code}]")
        raise CodeNotFoundError(f"No files found for code '{code}'")
