"""Service layer for business logic."""

from codeshare.services.access_guard import AccessGuard, AccessOutcome, AccessResult
from codeshare.services.container_service import ContainerService
from codeshare.services.resolver import Resolver
from codeshare.services.share_service import ShareService

__all__ = [
    "AccessGuard",
    "AccessOutcome",
    "AccessResult",
    "ContainerService",
    "Resolver",
    "ShareService",
]
