import base64
import hashlib
import secrets
from dataclasses import dataclass

from passlib.context import CryptContext

from bakramandi.core.config import settings

_pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


@dataclass(frozen=True)
class ResetTokenParts:
    plain: str
    hashed: str


def generate_reset_token(pepper: str | None = None) -> ResetTokenParts:
    plain = secrets.token_urlsafe(32)
    return ResetTokenParts(plain=plain, hashed=hash_reset_token(plain, pepper))


def hash_reset_token(plain: str, pepper: str | None = None) -> str:
    # Only the peppered digest is stored; a leaked table cannot be replayed.
    if pepper is None:
        pepper = settings.reset_token_pepper.get_secret_value()
    digest = hashlib.sha256((plain + pepper).encode("utf-8")).digest()
    return base64.b64encode(digest).decode("utf-8")


def hash_password(plain: str) -> str:
    return _pwd_context.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    return _pwd_context.verify(plain, hashed)
