"""MailDomain SQLAlchemy model"""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, false, true, text
from sqlalchemy.orm import relationship, validates

from .base import Base


DEFAULT_SPAMCHECK_THRESHOLD = 100


class MailDomain(Base):
    """A mail domain owned by one user.

    The domain exclusively owns its entries, signing keys and allow/deny
    rules; deleting it cascades to all of them.
    """
    __tablename__ = "maildomain"

    id = Column(Integer, primary_key=True)
    owner = Column(Integer, ForeignKey("mailuser.id", ondelete="RESTRICT"), nullable=False, index=True)
    domainname = Column(String, nullable=False, unique=True)
    remotemx = Column(String, nullable=True)
    sender_verify = Column(Boolean, nullable=False, default=True, server_default=true())
    grey_listing = Column(Boolean, nullable=False, default=False, server_default=false())
    virus_check = Column(Boolean, nullable=False, default=True, server_default=true())
    spamcheck_threshold = Column(
        Integer,
        nullable=False,
        default=DEFAULT_SPAMCHECK_THRESHOLD,
        server_default=text(str(DEFAULT_SPAMCHECK_THRESHOLD)),
    )

    owner_user = relationship("MailUser", back_populates="domains")
    entries = relationship(
        "MailEntry",
        back_populates="domain",
        cascade="all, delete-orphan",
        order_by="MailEntry.name",
    )
    keys = relationship(
        "MailDomainKey",
        back_populates="domain",
        cascade="all, delete-orphan",
        order_by="MailDomainKey.selector",
    )
    allow_deny = relationship("AllowDenyList", back_populates="domain", cascade="all, delete-orphan")

    @validates("domainname")
    def validate_domainname(self, key, value):
        value = (value or "").strip()
        if not value:
            raise ValueError("Domain name cannot be empty")
        return value

    def full_name(self, local_part: str) -> str:
        """Render ``local_part@domain`` for messages and responses."""
        return f"{local_part}@{self.domainname}"

    def flags(self) -> dict:
        return {
            "remote_mx": self.remotemx,
            "sender_verify": self.sender_verify,
            "grey_listing": self.grey_listing,
            "virus_check": self.virus_check,
            "spamcheck_threshold": self.spamcheck_threshold,
        }

    def __repr__(self):
        return f"<MailDomain(id={self.id}, domainname='{self.domainname}', owner={self.owner})>"
