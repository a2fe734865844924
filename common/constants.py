"""Project-wide constants (code space, masking label, secret limits)."""

CODE_LENGTH: int = 6
CODE_MIN: int = 10 ** (CODE_LENGTH - 1)  # 100000
CODE_MAX: int = 10 ** CODE_LENGTH - 1    # 999999

# Shown instead of the real container name when a per-file code is resolved.
MASKED_CONTAINER_LABEL: str = "Private Workspace"

# bcrypt only looks at the first 72 bytes of its input.
MAX_SECRET_BYTES: int = 72

# Container names travel as a single URL path segment.
CONTAINER_NAME_MAX_LENGTH: int = 128
RESERVED_CONTAINER_NAMES = frozenset({".", ".."})

# Upper bound on files accepted by one share or container upload.
MAX_FILES_PER_UPLOAD: int = 100
