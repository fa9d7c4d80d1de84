from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt

from quest2go.core.errors import ConfigError, ExpiredToken, InvalidToken

DEFAULT_TTL_SECONDS = 24 * 60 * 60
REQUIRED_CLAIMS = ["userId", "email", "userType", "exp"]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class SessionClaims:
    account_id: int
    email: str
    user_type: str


class SessionTokenCodec:
    """Issues and verifies the signed session tokens carried in the session cookie.

    Expiry is checked against the injected clock rather than PyJWT's own,
    so a token's lifetime can be exercised without waiting on wall time.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock

    def issue(self, claims: SessionClaims) -> str:
        if not self._secret_key:
            raise ConfigError("Session signing key is not configured.")
        issued_at = self._clock()
        payload = {
            "userId": claims.account_id,
            "email": claims.email,
            "userType": claims.user_type,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self.ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> SessionClaims:
        if not self._secret_key:
            raise ConfigError("Session signing key is not configured.")
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.algorithm],
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "verify_nbf": False,
                    "require": REQUIRED_CLAIMS,
                },
            )
        except jwt.InvalidTokenError as exc:
            raise InvalidToken() from exc

        try:
            expires_at = int(payload["exp"])
            claims = SessionClaims(
                account_id=int(payload["userId"]),
                email=str(payload["email"]),
                user_type=str(payload["userType"]),
            )
        except (TypeError, ValueError) as exc:
            raise InvalidToken() from exc

        if self._clock().timestamp() >= expires_at:
            raise ExpiredToken()
        return claims
