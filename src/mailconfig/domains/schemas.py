"""Pydantic schemas for domain administration endpoints."""

from typing import Dict, List, Optional

from pydantic import Field

from ..models.domain import MailDomain
from ..schemas import KebabModel, RequestModel


class DomainFlags(KebabModel):
    """Per-domain flags as returned by list, new and set-flags.

    ``remote-mx`` is omitted when the domain has no relay.
    """
    remote_mx: Optional[str] = Field(default=None, description="Relay host for the domain, if any")
    sender_verify: bool
    grey_listing: bool
    virus_check: bool
    spamcheck_threshold: int

    @classmethod
    def from_domain(cls, domain: MailDomain) -> "DomainFlags":
        return cls(**domain.flags())


class DomainListResponse(KebabModel):
    domains: Dict[str, DomainFlags]


class DomainFlagsRequest(RequestModel):
    """Fields shared by create and set-flags; omitted fields mean 'leave alone' (or default)."""
    domain_name: str = Field(..., min_length=1, pattern=r"^\S+$", examples=["example.com"])
    owner: Optional[str] = Field(default=None, description="Username of the owner (superuser only)")
    remote_mx: Optional[str] = Field(default=None, description="Relay host; empty string clears it")
    sender_verify: Optional[bool] = None
    grey_listing: Optional[bool] = None
    virus_check: Optional[bool] = None
    spamcheck_threshold: Optional[int] = None

    def flag_kwargs(self) -> dict:
        return self.model_dump(exclude={"domain_name"})


class SetDomainFlagsRequest(DomainFlagsRequest):
    """Request body for POST /domain/set-flags"""


class CreateDomainRequest(DomainFlagsRequest):
    """Request body for POST /domain/new (superuser only)"""


class AllowDenyResponse(KebabModel):
    allow: List[str]
    deny: List[str]
