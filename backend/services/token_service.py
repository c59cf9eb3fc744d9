"""Service issuing signed identity tokens for the chat widget."""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from backend.config import settings
from backend.exceptions import TokenError
from backend.schemas.token import IdentityClaims

logger = logging.getLogger(__name__)

# Placeholder identity until real user sessions exist
PLACEHOLDER_IDENTITY = IdentityClaims(
    user_id="example-user-id",
    email="user@example.com",
    stripe_accounts=["acct_123"],
)

ALGORITHM = "HS256"


class TokenService:
    """Signs short-lived HS256 identity tokens."""

    def __init__(
        self,
        secret: Optional[str] = None,
        ttl_seconds: Optional[int] = None,
        identity: IdentityClaims = PLACEHOLDER_IDENTITY,
    ):
        self.secret = secret if secret is not None else settings.chatbot_identity_secret
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else settings.token_ttl_seconds
        self.identity = identity

    def issue_token(self, now: Optional[datetime] = None) -> str:
        """
        Sign a token carrying the identity claims.

        Raises:
            TokenError: if no secret is configured or signing fails.
        """
        if not self.secret:
            raise TokenError("CHATBOT_IDENTITY_SECRET not set")

        issued_at = now or datetime.now(timezone.utc)
        payload = self.identity.model_dump()
        payload["iat"] = issued_at
        payload["exp"] = issued_at + timedelta(seconds=self.ttl_seconds)

        try:
            return jwt.encode(payload, self.secret, algorithm=ALGORITHM)
        except Exception as exc:
            logger.exception("Chat token signing failed")
            raise TokenError("Failed to generate token") from exc
