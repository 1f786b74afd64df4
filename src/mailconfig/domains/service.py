"""Domain administration service.

Lookup-and-gate helper used by every domain-scoped route, plus listing,
creation and flag changes for domains themselves.
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from ..auth.identity import Identity
from ..auth.policy import may_access, may_create_domain, may_reassign_owner
from ..database import flush_or_fail
from ..errors import NotFound, PermissionDenied
from ..models.allow_deny import AllowDenyList
from ..models.domain import DEFAULT_SPAMCHECK_THRESHOLD, MailDomain
from ..models.user import MailUser
from ..observability.metrics import mutations_total

logger = logging.getLogger(__name__)


def find_domain(db: Session, name: str) -> Optional[MailDomain]:
    return db.query(MailDomain).filter(MailDomain.domainname == name).first()


def find_user(db: Session, username: str) -> Optional[MailUser]:
    return db.query(MailUser).filter(MailUser.username == username).first()


def get_accessible_domain(db: Session, name: str, identity: Identity) -> MailDomain:
    """Load a domain by name and check the identity may administer it.

    Raises:
        NotFound: No such domain
        PermissionDenied: The identity is neither the owner nor a superuser
    """
    domain = find_domain(db, name)
    if domain is None:
        raise NotFound(name)
    if not may_access(domain, identity):
        logger.warning(f"Denied access to {name}", extra={"domain": name})
        raise PermissionDenied(name)
    return domain


def list_domains(db: Session, identity: Identity) -> List[MailDomain]:
    """Domains owned by the calling identity, ordered by name."""
    return db.query(MailDomain).filter(
        MailDomain.owner == identity.user_id
    ).order_by(MailDomain.domainname.asc()).all()


def set_domain_flags(
    db: Session,
    identity: Identity,
    name: str,
    owner: Optional[str] = None,
    remote_mx: Optional[str] = None,
    sender_verify: Optional[bool] = None,
    grey_listing: Optional[bool] = None,
    virus_check: Optional[bool] = None,
    spamcheck_threshold: Optional[int] = None,
) -> MailDomain:
    """Change a domain's owner and/or flags; ``None`` leaves a value alone.

    An empty ``remote_mx`` clears the relay.

    Raises:
        NotFound: No such domain, or no user called ``owner``
        PermissionDenied: No access to the domain, or owner change by a non-superuser
    """
    domain = get_accessible_domain(db, name, identity)

    if owner is not None:
        if not may_reassign_owner(identity):
            raise PermissionDenied(name)
        new_owner = find_user(db, owner)
        if new_owner is None:
            raise NotFound(owner)
        domain.owner = new_owner.id

    # The rest does not need superuser
    if remote_mx is not None:
        domain.remotemx = remote_mx or None
    if sender_verify is not None:
        domain.sender_verify = sender_verify
    if grey_listing is not None:
        domain.grey_listing = grey_listing
    if virus_check is not None:
        domain.virus_check = virus_check
    if spamcheck_threshold is not None:
        domain.spamcheck_threshold = spamcheck_threshold

    flush_or_fail(db)

    mutations_total.labels(resource="domain", action="set_flags").inc()
    logger.info(f"Updated flags of {name}", extra={"domain": name})
    return domain


def create_domain(
    db: Session,
    identity: Identity,
    name: str,
    owner: Optional[str] = None,
    remote_mx: Optional[str] = None,
    sender_verify: Optional[bool] = None,
    grey_listing: Optional[bool] = None,
    virus_check: Optional[bool] = None,
    spamcheck_threshold: Optional[int] = None,
) -> MailDomain:
    """Create a domain (superuser only), owned by ``owner`` or the caller.

    Raises:
        PermissionDenied: The identity is not a superuser
        NotFound: No user called ``owner``
        StoreFailure: The domain already exists
    """
    if not may_create_domain(identity):
        raise PermissionDenied("You are not permitted to create domains")

    if owner is not None:
        owner_user = find_user(db, owner)
        if owner_user is None:
            raise NotFound(f"Unknown user {owner}")
        owner_id = owner_user.id
    else:
        owner_id = identity.user_id

    domain = MailDomain(
        owner=owner_id,
        domainname=name,
        remotemx=remote_mx or None,
        sender_verify=True if sender_verify is None else sender_verify,
        grey_listing=False if grey_listing is None else grey_listing,
        virus_check=True if virus_check is None else virus_check,
        spamcheck_threshold=(
            DEFAULT_SPAMCHECK_THRESHOLD if spamcheck_threshold is None else spamcheck_threshold
        ),
    )
    db.add(domain)
    flush_or_fail(db)

    mutations_total.labels(resource="domain", action="create").inc()
    logger.info(f"Created domain {domain.domainname}", extra={"domain": domain.domainname})
    return domain


def list_allow_deny(db: Session, domain: MailDomain) -> Tuple[List[str], List[str]]:
    """Sender allow and deny rules of a domain, each sorted by value."""
    rows = db.query(AllowDenyList).filter(
        AllowDenyList.maildomain == domain.id
    ).order_by(AllowDenyList.value.asc()).all()
    allows = [row.value for row in rows if row.allow]
    denys = [row.value for row in rows if not row.allow]
    return allows, denys


def list_all_domains(db: Session) -> List[MailDomain]:
    """Every domain regardless of owner, ordered by name."""
    return db.query(MailDomain).order_by(MailDomain.domainname.asc()).all()
