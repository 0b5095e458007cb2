import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from alphatrive.core.exceptions import Unauthenticated

logger = logging.getLogger(__name__)


class TokenService:
    """Issues and verifies signed, time-limited identity tokens.

    Tokens are HS256 JWTs whose ``sub`` claim is the user id. There is no
    revocation list: expiry is the only bound, and logging out is the client
    discarding its token.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256", expires_in: timedelta = timedelta(hours=1)):
        if not secret_key:
            raise ValueError("secret_key must not be empty")
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_in = expires_in

    def issue(self, user_id: int, now: Optional[datetime] = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "iat": issued_at,
            "exp": issued_at + self.expires_in,
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> int:
        """Return the user id embedded in ``token``.

        Raises ``Unauthenticated`` for a bad signature, an expired token, a
        malformed token, or a token without a usable subject.
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            raise Unauthenticated("Token has expired")
        except jwt.InvalidTokenError as e:
            logger.warning(f"Rejected token: {e}")
            raise Unauthenticated("Token is not valid")

        try:
            return int(payload["sub"])
        except (TypeError, ValueError):
            raise Unauthenticated("Token is not valid")
