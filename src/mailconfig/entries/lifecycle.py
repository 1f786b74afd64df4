"""Lifecycle of mail entries within a domain.

An entry's kind never changes once created. What may change is its payload,
and which payload an entry carries is decided by its kind alone:

    login, account    -> Secret   (Argon2id encoded, stored in ``password``)
    alias, list       -> Members  (non-empty member list, stored in ``expansion``)
    bouncer, blackhole-> Reason   (free text, stored in ``expansion``)

Edits are checked against ``ALLOWED_EDITS`` before anything is touched.
Authorisation is the caller's job: every function here assumes the identity
has already passed ``may_access`` for the domain.
"""

import logging
from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional, Union

from sqlalchemy.orm import Session

from ..auth.password import encode_password
from ..database import flush_or_fail
from ..errors import NotAlias, NotFound, NotLoginOrAccount, NotReasonBearing
from ..models.domain import MailDomain
from ..models.entry import MEMBER_KINDS, REASON_KINDS, SECRET_KINDS, MailEntry, MailEntryKind
from ..observability.metrics import mutations_total
from .expansion import add_member, parse_expansion, remove_member, replace_expansion

logger = logging.getLogger(__name__)


# Payloads

@dataclass(frozen=True)
class Secret:
    """Credential of a login or account: plaintext on input, encoded once stored."""
    value: str


@dataclass(frozen=True)
class Members:
    """Membership of an alias or list."""
    expansion: str

    @property
    def members(self):
        return parse_expansion(self.expansion)


@dataclass(frozen=True)
class Reason:
    """Free-text reason of a bouncer or blackhole."""
    text: Optional[str] = None


EntryPayload = Union[Secret, Members, Reason]

PAYLOAD_FOR_KIND = {
    MailEntryKind.LOGIN: Secret,
    MailEntryKind.ACCOUNT: Secret,
    MailEntryKind.ALIAS: Members,
    MailEntryKind.LIST: Members,
    MailEntryKind.BOUNCER: Reason,
    MailEntryKind.BLACKHOLE: Reason,
}

KINDS_FOR_PAYLOAD = {
    Secret: SECRET_KINDS,
    Members: MEMBER_KINDS,
    Reason: REASON_KINDS,
}


@dataclass(frozen=True)
class EntryView:
    name: str
    domain: str
    kind: MailEntryKind
    payload: EntryPayload

    @property
    def full_name(self) -> str:
        return f"{self.name}@{self.domain}"


# Edits

@dataclass(frozen=True)
class SetSecret:
    secret: str


@dataclass(frozen=True)
class SetExpansion:
    expansion: str


@dataclass(frozen=True)
class AddMember:
    member: str


@dataclass(frozen=True)
class RemoveMember:
    member: str


@dataclass(frozen=True)
class SetReason:
    reason: Optional[str]


EntryEdit = Union[SetSecret, SetExpansion, AddMember, RemoveMember, SetReason]

ALLOWED_EDITS: Dict[type, FrozenSet[MailEntryKind]] = {
    SetSecret: SECRET_KINDS,
    SetExpansion: MEMBER_KINDS,
    AddMember: MEMBER_KINDS,
    RemoveMember: MEMBER_KINDS,
    SetReason: REASON_KINDS,
}

# Error raised when an operation needs one of these kind groups and the entry is not in it
_WRONG_KIND_ERRORS = {
    SECRET_KINDS: NotLoginOrAccount,
    MEMBER_KINDS: NotAlias,
    REASON_KINDS: NotReasonBearing,
}


def can_apply(kind: MailEntryKind, edit: EntryEdit) -> bool:
    """Check whether ``edit`` is legal for an entry of ``kind``.

    Example:
        >>> can_apply(MailEntryKind.ALIAS, AddMember("a@example.com"))
        True
        >>> can_apply(MailEntryKind.LOGIN, SetExpansion("a@example.com"))
        False
    """
    return kind in ALLOWED_EDITS.get(type(edit), frozenset())


def _require_kind(kinds: FrozenSet[MailEntryKind], kind: MailEntryKind, full_name: str) -> None:
    if kind not in kinds:
        raise _WRONG_KIND_ERRORS[kinds](full_name)


def _find(db: Session, domain: MailDomain, name: str) -> Optional[MailEntry]:
    return db.query(MailEntry).filter(
        MailEntry.maildomain == domain.id,
        MailEntry.name == name,
    ).first()


def _get_or_404(db: Session, domain: MailDomain, name: str) -> MailEntry:
    entry = _find(db, domain, name)
    if entry is None:
        raise NotFound(domain.full_name(name))
    return entry


def to_view(domain: MailDomain, entry: MailEntry) -> EntryView:
    """Build the typed view of a stored entry from its kind tag."""
    kind = entry.entry_kind
    payload_type = PAYLOAD_FOR_KIND[kind]
    if payload_type is Secret:
        payload = Secret(entry.password or "")
    elif payload_type is Members:
        payload = Members(entry.expansion or "")
    else:
        payload = Reason(entry.expansion)
    return EntryView(name=entry.name, domain=domain.domainname, kind=kind, payload=payload)


def list_entries(db: Session, domain: MailDomain) -> Dict[str, EntryView]:
    rows = db.query(MailEntry).filter(
        MailEntry.maildomain == domain.id
    ).order_by(MailEntry.name).all()
    return {row.name: to_view(domain, row) for row in rows}


def read_entry(db: Session, domain: MailDomain, name: str) -> EntryView:
    """Fetch one entry.

    Raises:
        NotFound: ``name@domain`` does not exist
    """
    return to_view(domain, _get_or_404(db, domain, name))


def create_entry(
    db: Session,
    domain: MailDomain,
    name: str,
    kind: MailEntryKind,
    payload: EntryPayload,
) -> EntryView:
    """Create an entry of ``kind`` carrying ``payload``.

    Args:
        db: Database session
        domain: Domain the entry belongs to
        name: Local part, unique within the domain (stored as given)
        kind: Entry kind
        payload: Secret for login/account, Members for alias/list, Reason for bouncer/blackhole

    Returns:
        EntryView: The created entry

    Raises:
        NotLoginOrAccount / NotAlias / NotReasonBearing: Payload does not fit the kind
        AliasWouldBecomeEmpty: Alias or list created without members
        StoreFailure: The name already exists in the domain
    """
    kind = MailEntryKind(kind)
    full_name = domain.full_name(name)

    if not isinstance(payload, PAYLOAD_FOR_KIND[kind]):
        _require_kind(KINDS_FOR_PAYLOAD[type(payload)], kind, full_name)

    entry = MailEntry(maildomain=domain.id, name=name, kind=kind.value)
    if isinstance(payload, Secret):
        entry.password = encode_password(payload.value)
    elif isinstance(payload, Members):
        entry.expansion = replace_expansion(payload.expansion, full_name)
    else:
        entry.expansion = payload.text

    db.add(entry)
    flush_or_fail(db)

    mutations_total.labels(resource="entry", action="create").inc()
    logger.info(f"Created {kind.value} {full_name}", extra={"domain": domain.domainname, "entry": name})
    return to_view(domain, entry)


def delete_entry(db: Session, domain: MailDomain, name: str) -> str:
    """Delete an entry, returning its full name.

    Raises:
        NotFound: ``name@domain`` does not exist
    """
    entry = _get_or_404(db, domain, name)
    full_name = domain.full_name(name)

    db.delete(entry)
    flush_or_fail(db)

    mutations_total.labels(resource="entry", action="delete").inc()
    logger.info(f"Deleted {full_name}", extra={"domain": domain.domainname, "entry": name})
    return full_name


def update_entry(db: Session, domain: MailDomain, name: str, edit: EntryEdit) -> str:
    """Apply ``edit`` to an existing entry, returning its full name.

    Raises:
        NotFound: ``name@domain`` does not exist
        NotLoginOrAccount: SetSecret on anything but a login or account
        NotAlias: SetExpansion, AddMember or RemoveMember on anything but an alias or list
        NotReasonBearing: SetReason on anything but a bouncer or blackhole
        AliasComponentNotFound / AliasWouldBecomeEmpty / InvalidMember: From the list editor
    """
    entry = _get_or_404(db, domain, name)
    full_name = domain.full_name(name)

    _require_kind(ALLOWED_EDITS[type(edit)], entry.entry_kind, full_name)

    if isinstance(edit, SetSecret):
        entry.password = encode_password(edit.secret)
    elif isinstance(edit, SetExpansion):
        entry.expansion = replace_expansion(edit.expansion, full_name)
    elif isinstance(edit, AddMember):
        entry.expansion = add_member(entry.expansion, edit.member)
    elif isinstance(edit, RemoveMember):
        entry.expansion = remove_member(entry.expansion, edit.member, full_name)
    else:
        entry.expansion = edit.reason

    flush_or_fail(db)

    mutations_total.labels(resource="entry", action=type(edit).__name__).inc()
    logger.info(
        f"Applied {type(edit).__name__} to {full_name}",
        extra={"domain": domain.domainname, "entry": name},
    )
    return full_name
