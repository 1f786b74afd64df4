"""MailDomainKey SQLAlchemy model"""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Text, UniqueConstraint, false
from sqlalchemy.orm import relationship

from .base import Base


class MailDomainKey(Base):
    """DKIM signing key for a domain, identified by its selector.

    Several keys may be signing at once during a rotation; ``signing = False``
    keeps a retired key published for verification of recently signed mail.
    """
    __tablename__ = "maildomainkey"

    id = Column(Integer, primary_key=True)
    maildomain = Column(Integer, ForeignKey("maildomain.id", ondelete="CASCADE"), nullable=False, index=True)
    selector = Column(String, nullable=False)
    privkey = Column(Text, nullable=False)
    pubkey = Column(Text, nullable=False)
    signing = Column(Boolean, nullable=False, default=False, server_default=false())

    domain = relationship("MailDomain", back_populates="keys")

    __table_args__ = (
        UniqueConstraint("maildomain", "selector", name="uq_maildomainkey_maildomain_selector"),
    )

    def __repr__(self):
        return f"<MailDomainKey(id={self.id}, maildomain={self.maildomain}, selector='{self.selector}', signing={self.signing})>"
