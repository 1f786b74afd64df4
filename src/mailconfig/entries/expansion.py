"""Editing of alias and list membership.

An expansion is stored as a comma separated list of members. Editing always
works on the parsed form: members are trimmed, blanks dropped and duplicates
collapsed keeping the first occurrence, and the result is written back with
the canonical ``", "`` separator.

An alias or list must always resolve to at least one member.
"""

from typing import List, Optional

from ..errors import AliasComponentNotFound, AliasWouldBecomeEmpty, InvalidMember

SEPARATOR = ", "


def parse_expansion(value: Optional[str]) -> List[str]:
    """Split a stored expansion into its ordered, de-duplicated members.

    Example:
        >>> parse_expansion(" a@x,b@x , a@x,")
        ['a@x', 'b@x']
    """
    members: List[str] = []
    for item in (value or "").split(","):
        item = item.strip()
        if item and item not in members:
            members.append(item)
    return members


def render_expansion(members: List[str]) -> str:
    return SEPARATOR.join(members)


def _clean_member(member: str) -> str:
    cleaned = (member or "").strip()
    if not cleaned or "," in cleaned:
        raise InvalidMember(member)
    return cleaned


def add_member(current: Optional[str], member: str) -> str:
    """Add ``member`` to the list unless it is already there.

    Adding is idempotent: ``add_member(add_member(L, m), m) == add_member(L, m)``.

    Raises:
        InvalidMember: If the member is blank or contains a separator
    """
    member = _clean_member(member)
    members = parse_expansion(current)
    if member not in members:
        members.append(member)
    return render_expansion(members)


def remove_member(current: Optional[str], member: str, entry: Optional[str] = None) -> str:
    """Remove every occurrence of ``member`` from the list.

    Args:
        current: Stored expansion
        member: Member to remove (trimmed before comparison)
        entry: Full name of the alias being edited, used in error subjects

    Raises:
        AliasComponentNotFound: If nothing was removed
        AliasWouldBecomeEmpty: If the list would have no members left
    """
    member = (member or "").strip()
    members = parse_expansion(current)
    remaining = [m for m in members if m != member]

    if remaining == members:
        raise AliasComponentNotFound(member)
    if not remaining:
        raise AliasWouldBecomeEmpty(entry if entry is not None else render_expansion(members))

    return render_expansion(remaining)


def replace_expansion(value: Optional[str], entry: Optional[str] = None) -> str:
    """Overwrite the whole list, e.g. for bulk edits.

    Raises:
        AliasWouldBecomeEmpty: If the new value has no members
    """
    members = parse_expansion(value)
    if not members:
        raise AliasWouldBecomeEmpty(entry if entry is not None else "")
    return render_expansion(members)
