"""Domain administration endpoints.

Everyone may list their own domains and change the flags of domains they can
access. Creating domains and reassigning owners is reserved to superusers.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..auth.dependencies import CurrentIdentity
from ..database import get_db
from .schemas import (
    AllowDenyResponse,
    CreateDomainRequest,
    DomainFlags,
    DomainListResponse,
    SetDomainFlagsRequest,
)
from .service import create_domain, get_accessible_domain, list_allow_deny, list_domains, set_domain_flags


router = APIRouter(prefix="/domain", tags=["Domains"])


@router.get("/list", response_model=DomainListResponse, response_model_exclude_none=True)
def list_my_domains(identity: CurrentIdentity, db: Session = Depends(get_db)) -> DomainListResponse:
    """List the domains owned by the caller, with their flags."""
    domains = list_domains(db, identity)
    return DomainListResponse(
        domains={domain.domainname: DomainFlags.from_domain(domain) for domain in domains}
    )


@router.post("/set-flags", response_model=DomainFlags, response_model_exclude_none=True)
def set_flags(
    data: SetDomainFlagsRequest,
    identity: CurrentIdentity,
    db: Session = Depends(get_db),
) -> DomainFlags:
    """Change the flags (and, for superusers, the owner) of a domain.

    Raises:
        404: Unknown domain or owner
        403: No access to the domain, or owner change without superuser
    """
    domain = set_domain_flags(db, identity, data.domain_name, **data.flag_kwargs())
    db.commit()
    return DomainFlags.from_domain(domain)


@router.post("/new", response_model=DomainFlags, response_model_exclude_none=True)
def new_domain(
    data: CreateDomainRequest,
    identity: CurrentIdentity,
    db: Session = Depends(get_db),
) -> DomainFlags:
    """Create a domain (superuser only).

    Raises:
        403: Caller is not a superuser
        404: Unknown owner
        500: Domain already exists
    """
    domain = create_domain(db, identity, data.domain_name, **data.flag_kwargs())
    db.commit()
    return DomainFlags.from_domain(domain)


@router.get("/allow-deny/{domain_name}", response_model=AllowDenyResponse)
def get_allow_deny(
    domain_name: str,
    identity: CurrentIdentity,
    db: Session = Depends(get_db),
) -> AllowDenyResponse:
    """List a domain's sender allow and deny rules."""
    domain = get_accessible_domain(db, domain_name, identity)
    allows, denys = list_allow_deny(db, domain)
    return AllowDenyResponse(allow=allows, deny=denys)
