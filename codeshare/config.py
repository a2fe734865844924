"""Configuration settings for the CodeShare server."""

import os


DATABASE_PATH = os.environ.get("CODESHARE_DATABASE_PATH", "data/codeshare.db")

DATABASE_TIMEOUT_SECONDS = float(os.environ.get("CODESHARE_DB_TIMEOUT", "5.0"))

SERVER_HOST = os.environ.get("CODESHARE_HOST", "0.0.0.0")

SERVER_PORT = int(os.environ.get("CODESHARE_PORT", "8000"))

CODE_MAX_ATTEMPTS = int(os.environ.get("CODESHARE_CODE_MAX_ATTEMPTS", "10"))

BCRYPT_ROUNDS = int(os.environ.get("CODESHARE_BCRYPT_ROUNDS", "12"))

# Comma-separated browser origins allowed to call the API.
CORS_ORIGINS = [
    origin.strip()
    for origin in os.environ.get(
        "CODESHARE_CORS_ORIGINS", "http://localhost:3000,http://localhost:3002"
    ).split(",")
    if origin.strip()
]
