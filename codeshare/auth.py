"""Container secret hashing and verification."""

import bcrypt

from common.constants import MAX_SECRET_BYTES
from codeshare import config
from codeshare.exceptions import ValidationError


def hash_secret(secret: str) -> str:
    """
    Hash a container secret using bcrypt.

    Args:
        secret: Plain text secret (PIN or password)

    Returns:
        Bcrypt hash of the secret

    Raises:
        ValidationError: If the secret is empty or longer than bcrypt accepts
    """
    secret_bytes = secret.encode('utf-8')
    if not secret_bytes:
        raise ValidationError("Container secret must not be empty")
    if len(secret_bytes) > MAX_SECRET_BYTES:
        raise ValidationError(f"Container secret must be at most {MAX_SECRET_BYTES} bytes")
    salt = bcrypt.gensalt(rounds=config.BCRYPT_ROUNDS)
    hashed = bcrypt.hashpw(secret_bytes, salt)
    return hashed.decode('utf-8')


def verify_secret(secret: str, secret_hash: str) -> bool:
    """
    Verify a secret against a bcrypt hash in constant time.

    Args:
        secret: Plain text secret to verify
        secret_hash: Bcrypt hash to verify against

    Returns:
        True if the secret matches the hash, False otherwise
    """
    secret_bytes = secret.encode('utf-8')
    if not secret_bytes or len(secret_bytes) > MAX_SECRET_BYTES:
        return False
    return bcrypt.checkpw(secret_bytes, secret_hash.encode('utf-8'))
