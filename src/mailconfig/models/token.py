"""MailAuthToken SQLAlchemy model"""

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from .base import Base


class MailAuthToken(Base):
    """Opaque bearer token owned by a single user.

    A user may hold any number of tokens, each with a free-text label.
    """
    __tablename__ = "mailauthtoken"

    id = Column(Integer, primary_key=True)
    mailuser = Column(Integer, ForeignKey("mailuser.id", ondelete="CASCADE"), nullable=False, index=True)
    token = Column(String, nullable=False, unique=True)
    label = Column(String, nullable=False)

    user = relationship("MailUser", back_populates="tokens")

    def __repr__(self):
        return f"<MailAuthToken(id={self.id}, mailuser={self.mailuser}, label='{self.label}')>"
