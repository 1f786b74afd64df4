"""SQLAlchemy models for mailconfig"""

from .base import Base
from .user import MailUser
from .token import MailAuthToken
from .domain import MailDomain
from .entry import MailEntry, MailEntryKind
from .domain_key import MailDomainKey
from .allow_deny import AllowDenyList

__all__ = [
    "Base",
    "MailUser",
    "MailAuthToken",
    "MailDomain",
    "MailEntry",
    "MailEntryKind",
    "MailDomainKey",
    "AllowDenyList",
]
