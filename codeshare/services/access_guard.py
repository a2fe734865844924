"""Secret checks guarding container access."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from common.logging_config import get_logger
from codeshare.auth import verify_secret
from codeshare.exceptions import ContainerNotFoundError, InvalidSecretError
from codeshare.repositories.record_store import RecordStore
from codeshare.types import Container

logger = get_logger(__name__)


class AccessOutcome(Enum):
    AUTHORIZED = "authorized"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"


@dataclass(frozen=True)
class AccessResult:
    outcome: AccessOutcome
    container: Optional[Container] = None

    @property
    def authorized(self) -> bool:
        return self.outcome is AccessOutcome.AUTHORIZED


class AccessGuard:
    def __init__(self, store: RecordStore):
        self.store = store

    def check(self, name: str, secret: str) -> AccessResult:
        """
        Compare a supplied secret with the container's stored hash.

        The container snapshot is only attached to an authorized result.
        """
        container = self.store.get_container_by_name(name)
        if container is None:
            logger.debug(f"Access check: container not found: {name}")
            return AccessResult(AccessOutcome.NOT_FOUND)

        if not verify_secret(secret, container.secret_hash):
            logger.warning(f"Access check: wrong secret for container {name}")
            return AccessResult(AccessOutcome.FORBIDDEN)

        return AccessResult(AccessOutcome.AUTHORIZED, container)

    def authorize(self, name: str, secret: str) -> Container:
        """
        Same as check(), raising on refusal.

        Raises:
            ContainerNotFoundError: If the container does not exist
            InvalidSecretError: If the secret does not match
        """
        result = self.check(name, secret)
        if result.outcome is AccessOutcome.NOT_FOUND:
            raise ContainerNotFoundError(f"Container '{name}' not found")
        if result.outcome is AccessOutcome.FORBIDDEN:
            raise InvalidSecretError("Invalid container secret")
        return result.container
