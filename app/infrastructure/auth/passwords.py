from __future__ import annotations

from passlib.context import CryptContext

# pbkdf2 for new hashes; bcrypt hashes from older deployments still verify
pwd_context = CryptContext(schemes=["pbkdf2_sha256", "bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return pwd_context.verify(password, password_hash)
    except ValueError:
        # Unrecognised or malformed hash
        return False
