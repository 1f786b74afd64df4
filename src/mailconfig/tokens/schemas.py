"""Pydantic schemas for token endpoints."""

from typing import List

from pydantic import Field

from ..schemas import KebabModel, RequestModel


class TokenEntry(KebabModel):
    token: str
    label: str


class TokenListResponse(KebabModel):
    username: str
    used_token: str = Field(..., description="Token authenticating this request")
    tokens: List[TokenEntry]


class CreateTokenRequest(RequestModel):
    label: str = Field(..., min_length=1, max_length=200, examples=["laptop"])


class CreateTokenResponse(KebabModel):
    token: str


class RevokeTokenRequest(RequestModel):
    token: str = Field(..., min_length=1)


class RevokeTokenResponse(KebabModel):
    label: str
