"""DKIM key endpoints.

All four routes are POSTs carrying the domain in the body. Key creation is a
sync endpoint, so RSA generation runs on FastAPI's threadpool.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..auth.dependencies import CurrentIdentity
from ..database import get_db
from ..domains.service import get_accessible_domain
from .lifecycle import create_key, delete_key, list_keys, render_public_record, set_signing
from .schemas import (
    CreateKeyRequest,
    CreateKeyResponse,
    DeleteKeyRequest,
    DeleteKeyResponse,
    KeyListResponse,
    ListKeysRequest,
    SetSigningRequest,
    SigningResponse,
)


router = APIRouter(prefix="/domain/key", tags=["Domain Keys"])


@router.post("/list", response_model=KeyListResponse)
def list_domain_keys(
    data: ListKeysRequest,
    identity: CurrentIdentity,
    db: Session = Depends(get_db),
) -> KeyListResponse:
    domain = get_accessible_domain(db, data.mail_domain, identity)
    listing = list_keys(db, domain)
    return KeyListResponse(active=listing.active, passive=listing.passive)


@router.post("/create", response_model=CreateKeyResponse)
def create_domain_key(
    data: CreateKeyRequest,
    identity: CurrentIdentity,
    db: Session = Depends(get_db),
) -> CreateKeyResponse:
    """Generate a new key pair under a selector and return the record to publish.

    Raises:
        404: Unknown domain
        403: No access to the domain
        500: Selector already used by this domain
    """
    domain = get_accessible_domain(db, data.mail_domain, identity)
    key = create_key(db, domain, data.selector, signing=data.signing)
    db.commit()
    return CreateKeyResponse(signing=key.signing, key=render_public_record(key))


@router.post("/set-signing", response_model=SigningResponse)
def set_domain_key_signing(
    data: SetSigningRequest,
    identity: CurrentIdentity,
    db: Session = Depends(get_db),
) -> SigningResponse:
    domain = get_accessible_domain(db, data.mail_domain, identity)
    signing = set_signing(db, domain, data.selector, data.signing)
    db.commit()
    return SigningResponse(signing=signing)


@router.post("/delete", response_model=DeleteKeyResponse)
def delete_domain_key(
    data: DeleteKeyRequest,
    identity: CurrentIdentity,
    db: Session = Depends(get_db),
) -> DeleteKeyResponse:
    domain = get_accessible_domain(db, data.mail_domain, identity)
    selector, was_signing = delete_key(db, domain, data.selector)
    db.commit()
    return DeleteKeyResponse(selector=selector, signing=was_signing)
