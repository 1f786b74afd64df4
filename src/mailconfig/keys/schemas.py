"""Pydantic schemas for DKIM key endpoints."""

from typing import Dict

from pydantic import Field

from ..schemas import KebabModel, RequestModel

# A single DNS label, placed in front of ``._domainkey.<domain>``
SELECTOR_PATTERN = r"^[A-Za-z0-9]([A-Za-z0-9-]{0,61}[A-Za-z0-9])?$"


class KeyDomainRequest(RequestModel):
    mail_domain: str = Field(..., min_length=1, examples=["example.com"])


class KeySelectorRequest(KeyDomainRequest):
    selector: str = Field(..., pattern=SELECTOR_PATTERN, examples=["2026a"])


class ListKeysRequest(KeyDomainRequest):
    """Request body for POST /domain/key/list"""


class CreateKeyRequest(KeySelectorRequest):
    signing: bool = False


class SetSigningRequest(KeySelectorRequest):
    signing: bool


class DeleteKeyRequest(KeySelectorRequest):
    """Request body for POST /domain/key/delete"""


class KeyListResponse(KebabModel):
    """Selector -> ``v=DKIM1`` record, split by whether the key is signing."""
    active: Dict[str, str]
    passive: Dict[str, str]


class CreateKeyResponse(KebabModel):
    signing: bool
    key: str = Field(..., description="TXT record to publish at <selector>._domainkey")


class SigningResponse(KebabModel):
    signing: bool


class DeleteKeyResponse(KebabModel):
    selector: str
    signing: bool
