# server/core/security.py

import enum
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable
from jose import jwt, JWTError, ExpiredSignatureError
from jose.exceptions import JWTClaimsError
from passlib.context import CryptContext


logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = 60


# -------------------------------
# Password Hashing
# -------------------------------

class PasswordHasher:
    """
    Salted one-way hashing for user passwords.
    bcrypt generates a fresh salt per hash and compares in constant time.
    """

    def __init__(self, rounds: int = 10):
        self.context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def hash(self, password: str) -> str:
        return self.context.hash(password)

    def verify(self, password: str, hashed_password: str) -> bool:
        try:
            return self.context.verify(password, hashed_password)
        except (ValueError, TypeError):
            logger.warning("Password verification failed on unusable input")
            return False


# -------------------------------
# Tokens
# -------------------------------

@dataclass(frozen=True)
class Identity:
    """Authenticated caller, resolved once by the auth gate."""
    user_id: int


class RejectReason(str, enum.Enum):
    MALFORMED = "malformed"
    BAD_SIGNATURE = "bad_signature"
    EXPIRED = "expired"
    UNCONFIGURED = "unconfigured"


class TokenRejected(Exception):
    def __init__(self, reason: RejectReason):
        self.reason = reason
        super().__init__(reason.value)


class SigningKeyMissing(RuntimeError):
    pass


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """
    Issues and verifies HS256 bearer tokens carrying a `userId` claim.
    A missing secret makes both directions fail; there is no fallback key.
    """

    def __init__(
        self,
        secret: str | None,
        expires_delta: timedelta = timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES),
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.secret = secret
        self.expires_delta = expires_delta
        self.clock = clock

    def issue(self, user_id: int) -> str:
        if not self.secret:
            raise SigningKeyMissing("JWT_SECRET is not configured")
        issued_at = self.clock()
        claims = {
            "userId": user_id,
            "iat": issued_at,
            "exp": issued_at + self.expires_delta,
        }
        return jwt.encode(claims, self.secret, algorithm=ALGORITHM)

    def verify(self, token: str) -> Identity:
        if not self.secret:
            raise TokenRejected(RejectReason.UNCONFIGURED)

        try:
            unverified = jwt.get_unverified_claims(token)
        except JWTError:
            raise TokenRejected(RejectReason.MALFORMED)
        if "exp" not in unverified:
            raise TokenRejected(RejectReason.MALFORMED)

        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[ALGORITHM],
                options={"require_exp": True},
            )
        except ExpiredSignatureError:
            raise TokenRejected(RejectReason.EXPIRED)
        except JWTClaimsError:
            raise TokenRejected(RejectReason.MALFORMED)
        except JWTError:
            raise TokenRejected(RejectReason.BAD_SIGNATURE)

        user_id = payload.get("userId")
        if not isinstance(user_id, int) or isinstance(user_id, bool):
            raise TokenRejected(RejectReason.MALFORMED)
        return Identity(user_id=user_id)
