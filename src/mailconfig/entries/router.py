"""Mail entry endpoints.

Every route resolves the domain through ``get_accessible_domain`` first, so
only the domain's owner or a superuser reaches the lifecycle functions.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..auth.dependencies import CurrentIdentity
from ..database import get_db
from ..domains.service import get_accessible_domain
from ..models.entry import MailEntryKind
from .lifecycle import create_entry, delete_entry, list_entries, read_entry, update_entry
from .schemas import (
    CreateEntryRequest,
    CreationResponse,
    DeletionResponse,
    EntryListResponse,
    EntryResponse,
    UpdateEntryRequest,
    UpdateResponse,
)


router = APIRouter(prefix="/domain/entry", tags=["Mail Entries"])


@router.get("/{domain_name}", response_model=EntryListResponse, response_model_exclude_none=True)
def list_domain_entries(
    domain_name: str,
    identity: CurrentIdentity,
    db: Session = Depends(get_db),
) -> EntryListResponse:
    """List every entry of a domain by local part."""
    domain = get_accessible_domain(db, domain_name, identity)
    views = list_entries(db, domain)
    return EntryListResponse(
        entries={name: EntryResponse.from_view(view) for name, view in views.items()}
    )


@router.put("/{domain_name}", response_model=CreationResponse)
def create_domain_entry(
    domain_name: str,
    identity: CurrentIdentity,
    data: CreateEntryRequest,
    db: Session = Depends(get_db),
) -> CreationResponse:
    """Create a login, account, alias, list, bouncer or blackhole.

    Raises:
        404: Unknown domain
        403: No access to the domain
        400: Empty alias/list, invalid member or credential
        500: Entry name already taken in the domain
    """
    domain = get_accessible_domain(db, domain_name, identity)
    view = create_entry(db, domain, data.name, MailEntryKind(data.kind), data.payload())
    db.commit()
    return CreationResponse(created=view.full_name)


@router.get("/{domain_name}/{entry}", response_model=EntryResponse, response_model_exclude_none=True)
def get_domain_entry(
    domain_name: str,
    entry: str,
    identity: CurrentIdentity,
    db: Session = Depends(get_db),
) -> EntryResponse:
    domain = get_accessible_domain(db, domain_name, identity)
    return EntryResponse.from_view(read_entry(db, domain, entry))


@router.patch("/{domain_name}/{entry}", response_model=UpdateResponse)
def update_domain_entry(
    domain_name: str,
    entry: str,
    identity: CurrentIdentity,
    data: UpdateEntryRequest,
    db: Session = Depends(get_db),
) -> UpdateResponse:
    """Apply one edit to an entry; the edit must fit the entry's kind.

    Raises:
        404: Unknown domain or entry
        403: No access to the domain
        400: Edit does not fit the kind, or the member list edit is invalid
    """
    domain = get_accessible_domain(db, domain_name, identity)
    full_name = update_entry(db, domain, entry, data.edit())
    db.commit()
    return UpdateResponse(updated=full_name)


@router.delete("/{domain_name}/{entry}", response_model=DeletionResponse)
def delete_domain_entry(
    domain_name: str,
    entry: str,
    identity: CurrentIdentity,
    db: Session = Depends(get_db),
) -> DeletionResponse:
    domain = get_accessible_domain(db, domain_name, identity)
    full_name = delete_entry(db, domain, entry)
    db.commit()
    return DeletionResponse(deleted=full_name)
