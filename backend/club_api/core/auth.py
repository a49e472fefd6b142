"""Member authentication: bcrypt password hashes, HS256 JWTs, sign-up OTPs."""

import secrets
import string
import time
from dataclasses import dataclass

import bcrypt
import jwt as pyjwt
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from club_api.api.deps import get_app_settings
from club_api.core.config import Settings

_bearer_scheme = HTTPBearer(auto_error=False)

# bcrypt only reads the first 72 bytes; newer releases reject longer input
_BCRYPT_MAX_BYTES = 72

OTP_ALPHABET = string.digits + string.ascii_lowercase


@dataclass(frozen=True)
class MemberToken:
    """Claims carried by an access token."""

    email: str
    claims: dict

    @property
    def name(self) -> str | None:
        return self.claims.get("name")

    @property
    def phone_number(self) -> str | None:
        return self.claims.get("phone_number")


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = 10) -> str:
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt(rounds)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def generate_otp(length: int = 6) -> str:
    """Random code of digits and lowercase letters."""
    return "".join(secrets.choice(OTP_ALPHABET) for _ in range(length))


def create_access_token(
    settings: Settings,
    email: str,
    name: str | None = None,
    phone_number: str | None = None,
    now: int | None = None,
) -> str:
    issued_at = now if now is not None else int(time.time())
    payload = {
        "sub": email,
        "email": email,
        "name": name,
        "phone_number": phone_number,
        "iat": issued_at,
        "exp": issued_at + settings.jwt_expire_days * 24 * 60 * 60,
    }
    return pyjwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(settings: Settings, token: str) -> MemberToken:
    """Verify and decode an access token.

    Raises ``HTTPException(401)`` on any validation failure.
    """
    try:
        payload = pyjwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp", "iat"]},
        )
    except pyjwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token expired")
    except pyjwt.MissingRequiredClaimError as exc:
        raise HTTPException(status_code=401, detail=f"Missing required claim: {exc}")
    except pyjwt.InvalidTokenError as exc:
        raise HTTPException(status_code=401, detail=f"Invalid token: {exc}")

    return MemberToken(email=payload["sub"], claims=payload)


async def require_auth(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
    settings: Settings = Depends(get_app_settings),
) -> MemberToken:
    """FastAPI dependency that extracts and validates the bearer token.

    Usage::

        @router.get("/protected")
        async def protected(member: MemberToken = Depends(require_auth)):
            ...
    """
    if credentials is None:
        raise HTTPException(status_code=401, detail="Missing authorization header")
    return decode_access_token(settings, credentials.credentials)
