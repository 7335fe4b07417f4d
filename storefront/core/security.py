"""Password hashing and JWT issuance/verification for authentication."""

import enum
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Any

import bcrypt
import jwt

from storefront.core.config import Settings, get_settings

# Bcrypt cost (rounds). Trades brute-force resistance against login latency.
BCRYPT_ROUNDS = 10

# bcrypt only looks at the first 72 bytes of the password.
BCRYPT_MAX_BYTES = 72

# Fixed lifetime of an access token from issuance.
ACCESS_TOKEN_LIFETIME = timedelta(hours=24)

# Claims every access token must carry.
REQUIRED_CLAIMS = ("sub", "email", "role", "iat", "exp")


class Role(str, enum.Enum):
    """The two roles an account can hold."""

    ADMIN = "admin"
    CUSTOMER = "customer"


class MalformedHashError(ValueError):
    """Raised when a stored password hash is not a valid bcrypt hash."""


class TokenError(Exception):
    """Base class for access token verification failures."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class TokenExpiredError(TokenError):
    """Token signature is valid but the current time is at or past its expiry."""


class InvalidSignatureError(TokenError):
    """Token failed its integrity check (wrong key, or any segment tampered with)."""


class MalformedTokenError(TokenError):
    """Token is not a compact JWT, or its claims do not have the expected shape."""


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Every call uses a fresh salt."""
    if not plain_password:
        raise ValueError("Password must be non-empty")
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """
    Verify a plain password against a stored hash.

    Returns False on mismatch. Raises MalformedHashError if `hashed` is not a bcrypt hash.
    """
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError) as e:
        raise MalformedHashError("Stored password hash is invalid") from e


@dataclass(frozen=True)
class TokenClaims:
    """Identity carried by a verified access token."""

    account_id: int
    email: str
    role: Role
    issued_at: datetime
    expires_at: datetime


class TokenService:
    """
    Issues and verifies signed, time-limited access tokens.

    Stateless: verification only needs the signing secret, so any number of
    server instances can accept each other's tokens. There is no revocation;
    a token is trusted until its `exp` passes.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        lifetime: timedelta = ACCESS_TOKEN_LIFETIME,
    ) -> None:
        if not secret or not secret.strip():
            raise ValueError("Token signing secret must be non-empty")
        self._secret = secret
        self._algorithm = algorithm
        self._lifetime = lifetime

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret=settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
        )

    def issue(
        self,
        account_id: int,
        email: str,
        role: Role | str,
        issued_at: datetime | None = None,
    ) -> str:
        """Create a token with sub (account id), email, role, iat, and exp = iat + lifetime."""
        now = issued_at or datetime.now(UTC)
        payload: dict[str, Any] = {
            "sub": str(account_id),
            "email": email,
            "role": Role(role).value,
            "iat": now,
            "exp": now + self._lifetime,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Check signature and expiry and return the embedded claims.

        Raises TokenExpiredError, InvalidSignatureError or MalformedTokenError.
        A three-segment token that cannot be decoded counts as a failed signature
        check, since it is not something this service signed.
        """
        if not token or token.count(".") != 2:
            raise MalformedTokenError("Malformed token")
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": list(REQUIRED_CLAIMS)},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError("Token expired") from e
        except (jwt.DecodeError, jwt.InvalidAlgorithmError) as e:
            raise InvalidSignatureError("Invalid token signature") from e
        except jwt.InvalidTokenError as e:
            raise MalformedTokenError("Malformed token") from e
        return self._claims_from_payload(payload)

    @staticmethod
    def _claims_from_payload(payload: dict[str, Any]) -> TokenClaims:
        try:
            account_id = int(payload["sub"])
            role = Role(payload["role"])
        except (TypeError, ValueError) as e:
            raise MalformedTokenError("Malformed token") from e
        email = payload["email"]
        if not isinstance(email, str) or not email:
            raise MalformedTokenError("Malformed token")
        return TokenClaims(
            account_id=account_id,
            email=email,
            role=role,
            issued_at=datetime.fromtimestamp(payload["iat"], UTC),
            expires_at=datetime.fromtimestamp(payload["exp"], UTC),
        )


@lru_cache
def get_token_service() -> TokenService:
    """Process-wide token service built once from settings."""
    return TokenService.from_settings(get_settings())
