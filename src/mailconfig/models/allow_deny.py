"""AllowDenyList SQLAlchemy model"""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from .base import Base


class AllowDenyList(Base):
    """Per-domain sender allow (``allow = True``) or deny rule.

    Maintained by the reporting side; mailconfig only reads it.
    """
    __tablename__ = "allowdenylist"

    id = Column(Integer, primary_key=True)
    maildomain = Column(Integer, ForeignKey("maildomain.id", ondelete="CASCADE"), nullable=False, index=True)
    allow = Column(Boolean, nullable=False)
    value = Column(String, nullable=False)

    domain = relationship("MailDomain", back_populates="allow_deny")

    def __repr__(self):
        return f"<AllowDenyList(id={self.id}, maildomain={self.maildomain}, allow={self.allow}, value='{self.value}')>"
