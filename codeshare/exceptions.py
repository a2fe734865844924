"""Custom exception classes for CodeShare."""


class CodeShareException(Exception):
    """
    Base exception class for all CodeShare errors.
    """
    pass


class ValidationError(CodeShareException):
    """
    Raised when input is malformed or incomplete. Nothing is persisted.
    """
    pass


class ConflictError(CodeShareException):
    """
    Raised when a create operation violates a unique business key.
    """
    pass


class ContainerAlreadyExistsError(ConflictError):
    """
    Raised when attempting to create a container whose name is taken.
    """
    pass


class DuplicateCodeError(ConflictError):
    """
    Raised when a code is already assigned to a share record or a container file.
    """
    pass


class NotFoundError(CodeShareException):
    """
    Raised when a lookup misses.
    """
    pass


class CodeNotFoundError(NotFoundError):
    """
    Raised when a code resolves to neither a share record nor a container file.
    """
    pass


class ShareNotFoundError(NotFoundError):
    """
    Raised when a share record does not exist.
    """
    pass


class ContainerNotFoundError(NotFoundError):
    """
    Raised when a container does not exist.
    """
    pass


class FileEntryNotFoundError(NotFoundError):
    """
    Raised when a per-file code is not present in the given container.
    """
    pass


class ForbiddenError(CodeShareException):
    """
    Raised when access to a resource is refused.
    """
    pass


class InvalidSecretError(ForbiddenError):
    """
    Raised when the supplied container secret does not match.
    """
    pass


class StoreError(CodeShareException):
    """
    Raised when the underlying database fails. Fatal to the request only.
    """
    pass


class CodeSpaceExhaustedError(StoreError):
    """
    Raised when no unused code could be minted within the retry budget.
    """
    pass
