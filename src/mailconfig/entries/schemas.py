"""Pydantic schemas for mail entry endpoints.

Creation bodies are discriminated by ``kind`` and edit bodies by ``action``,
so a body that does not fit its kind is rejected before reaching the
lifecycle. Stored password hashes are never part of a response.
"""

from typing import Annotated, Dict, Literal, Optional, Union

from pydantic import Discriminator, Field

from ..models.entry import MailEntryKind
from ..schemas import KebabModel, RequestModel
from .lifecycle import (
    AddMember,
    EntryView,
    Members,
    Reason,
    RemoveMember,
    Secret,
    SetExpansion,
    SetReason,
    SetSecret,
)

# Local part of an address: no '@', no separators, no whitespace
ENTRY_NAME_PATTERN = r"^[^@,\s]+$"


class EntryBase(RequestModel):
    name: str = Field(..., min_length=1, max_length=64, pattern=ENTRY_NAME_PATTERN, examples=["postmaster"])


class CreateSecretEntry(EntryBase):
    kind: Literal["login", "account"]
    password: str = Field(..., min_length=1, description="Plain text, or an already encoded {ARGON2ID} value")

    def payload(self) -> Secret:
        return Secret(self.password)


class CreateMemberEntry(EntryBase):
    kind: Literal["alias", "list"]
    expansion: str = Field(..., description="Comma separated member addresses", examples=["a@example.org, b@example.org"])

    def payload(self) -> Members:
        return Members(self.expansion)


class CreateSinkEntry(EntryBase):
    kind: Literal["bouncer", "blackhole"]
    reason: Optional[str] = None

    def payload(self) -> Reason:
        return Reason(self.reason)


CreateEntryRequest = Annotated[
    Union[CreateSecretEntry, CreateMemberEntry, CreateSinkEntry],
    Discriminator("kind"),
]


class SetPasswordEdit(RequestModel):
    action: Literal["set-password"]
    password: str = Field(..., min_length=1)

    def edit(self) -> SetSecret:
        return SetSecret(self.password)


class SetExpansionEdit(RequestModel):
    action: Literal["set-expansion"]
    expansion: str

    def edit(self) -> SetExpansion:
        return SetExpansion(self.expansion)


class AddMemberEdit(RequestModel):
    action: Literal["add-member"]
    member: str

    def edit(self) -> AddMember:
        return AddMember(self.member)


class RemoveMemberEdit(RequestModel):
    action: Literal["remove-member"]
    member: str

    def edit(self) -> RemoveMember:
        return RemoveMember(self.member)


class SetReasonEdit(RequestModel):
    action: Literal["set-reason"]
    reason: Optional[str] = None

    def edit(self) -> SetReason:
        return SetReason(self.reason)


UpdateEntryRequest = Annotated[
    Union[SetPasswordEdit, SetExpansionEdit, AddMemberEdit, RemoveMemberEdit, SetReasonEdit],
    Discriminator("action"),
]


class EntryResponse(KebabModel):
    """One entry: its kind plus ``expansion`` (alias, list) or ``reason`` (bouncer, blackhole)."""
    kind: MailEntryKind
    expansion: Optional[str] = None
    reason: Optional[str] = None

    @classmethod
    def from_view(cls, view: EntryView) -> "EntryResponse":
        if isinstance(view.payload, Members):
            return cls(kind=view.kind, expansion=view.payload.expansion)
        if isinstance(view.payload, Reason):
            return cls(kind=view.kind, reason=view.payload.text)
        return cls(kind=view.kind)


class EntryListResponse(KebabModel):
    entries: Dict[str, EntryResponse]


class CreationResponse(KebabModel):
    created: str


class UpdateResponse(KebabModel):
    updated: str


class DeletionResponse(KebabModel):
    deleted: str
