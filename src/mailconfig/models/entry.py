"""MailEntry SQLAlchemy model and entry kinds"""

from enum import Enum

from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from .base import Base


class MailEntryKind(str, Enum):
    """Kinds of addressable entry within a domain.

    Values are stored as TEXT in the database and must match exactly.
    """
    LOGIN = "login"          # Mailbox with a password
    ACCOUNT = "account"      # Submission-only credential, no mailbox
    ALIAS = "alias"          # Forwarding to one or more addresses
    LIST = "list"            # Mailing list, expansion is its membership
    BOUNCER = "bouncer"      # Rejects mail, expansion holds the reason
    BLACKHOLE = "blackhole"  # Silently discards mail, expansion holds the reason


SECRET_KINDS = frozenset({MailEntryKind.LOGIN, MailEntryKind.ACCOUNT})
MEMBER_KINDS = frozenset({MailEntryKind.ALIAS, MailEntryKind.LIST})
REASON_KINDS = frozenset({MailEntryKind.BOUNCER, MailEntryKind.BLACKHOLE})

_KIND_VALUES = ", ".join(f"'{kind.value}'" for kind in MailEntryKind)
_SECRET_VALUES = ", ".join(f"'{kind.value}'" for kind in sorted(SECRET_KINDS))


class MailEntry(Base):
    """An entry (login, account, alias, list, bouncer or blackhole) in a domain.

    The ``password`` column is only ever populated for secret-bearing kinds
    and ``expansion`` only for the others. The check constraint below keeps
    the table honest even if a writer bypasses the lifecycle module.
    """
    __tablename__ = "mailentry"

    id = Column(Integer, primary_key=True)
    maildomain = Column(Integer, ForeignKey("maildomain.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    kind = Column(Text, nullable=False)
    password = Column(String, nullable=True)
    expansion = Column(String, nullable=True)

    domain = relationship("MailDomain", back_populates="entries")

    __table_args__ = (
        UniqueConstraint("maildomain", "name", name="uq_mailentry_maildomain_name"),
        CheckConstraint(f"kind IN ({_KIND_VALUES})", name="kind"),
        CheckConstraint(
            f"(kind IN ({_SECRET_VALUES}) AND expansion IS NULL)"
            f" OR (kind NOT IN ({_SECRET_VALUES}) AND password IS NULL)",
            name="kind_fields",
        ),
    )

    @property
    def entry_kind(self) -> MailEntryKind:
        return MailEntryKind(self.kind)

    def __repr__(self):
        return f"<MailEntry(id={self.id}, maildomain={self.maildomain}, name='{self.name}', kind='{self.kind}')>"
