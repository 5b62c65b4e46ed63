"""
User Model
Stores credentials, approval state and profile information.
"""

from sqlalchemy import Column, Integer, String, Boolean, DateTime, Index, func

from hornethive.database import Base
from hornethive.utils.dates import utc_now


class User(Base):
    """
    User account.

    `password` holds either a bcrypt hash or, for rows created before hashing
    was introduced, the raw password. Login upgrades the latter in place.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), nullable=False)
    username = Column(String(150), nullable=False)
    password = Column(String(1024), nullable=True)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)

    role = Column(String(50), default="user", nullable=False)
    approved = Column(Boolean, default=False, nullable=False)
    active = Column(Boolean, default=True, nullable=False)

    password_fresh = Column(DateTime(timezone=True), nullable=True)
    password_expire = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)

    __table_args__ = (
        Index("ix_users_email", "email", unique=True),
    )

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}', approved={self.approved})>"


# Case-insensitive username lookups
Index("ix_users_username_lower", func.lower(User.username))
