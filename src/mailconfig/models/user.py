"""MailUser SQLAlchemy model"""

from sqlalchemy import Boolean, Column, Integer, String, false
from sqlalchemy.orm import relationship, validates

from .base import Base


class MailUser(Base):
    """An administrator of one or more mail domains.

    Superusers may act across tenants: create domains, reassign domain
    owners and manage other users.
    """
    __tablename__ = "mailuser"

    id = Column(Integer, primary_key=True)
    username = Column(String, nullable=False, unique=True)
    superuser = Column(Boolean, nullable=False, default=False, server_default=false())

    domains = relationship("MailDomain", back_populates="owner_user")
    tokens = relationship(
        "MailAuthToken",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="MailAuthToken.id",
    )

    @validates("username")
    def validate_username(self, key, value):
        if not value or not value.strip():
            raise ValueError("Username cannot be empty")
        return value.strip()

    def __repr__(self):
        return f"<MailUser(id={self.id}, username='{self.username}', superuser={self.superuser})>"
