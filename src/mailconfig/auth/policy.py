"""Domain access policy.

Pure predicates deciding whether an identity may perform an administrative
action. Callers turn a ``False`` into ``PermissionDenied``.

Permission matrix:
┌──────────────────────────────┬───────────┬───────┬───────┐
│ Action                       │ Superuser │ Owner │ Other │
├──────────────────────────────┼───────────┼───────┼───────┤
│ Read/modify domain, entries  │     ✓     │   ✓   │       │
│ and keys                     │           │       │       │
│ Reassign domain owner        │     ✓     │       │       │
│ Create domain                │     ✓     │       │       │
│ List/create users            │     ✓     │       │       │
│ Manage own tokens            │     ✓     │   ✓   │   ✓   │
└──────────────────────────────┴───────────┴───────┴───────┘
"""

from ..models.domain import MailDomain
from .identity import Identity


def may_access(domain: MailDomain, identity: Identity) -> bool:
    return identity.is_superuser or identity.user_id == domain.owner


def may_reassign_owner(identity: Identity) -> bool:
    return identity.is_superuser


def may_create_domain(identity: Identity) -> bool:
    return identity.is_superuser


def may_list_all_users(identity: Identity) -> bool:
    return identity.is_superuser


def may_create_user(identity: Identity) -> bool:
    return identity.is_superuser
