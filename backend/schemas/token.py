"""Pydantic schemas for chat identity tokens."""
from typing import List

from pydantic import BaseModel


class IdentityClaims(BaseModel):
    """Identity claims embedded in a chat widget token."""

    user_id: str
    email: str
    stripe_accounts: List[str]


class TokenResponse(BaseModel):
    """Response schema for an issued token."""

    token: str
