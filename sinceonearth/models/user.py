"""
User model - registered travellers and administrators.

Passwords are only ever stored as bcrypt hashes; `to_dict()` never
includes the hash so API responses can be built straight from it.
"""

import uuid
from datetime import datetime, timezone
from typing import List, Optional, TYPE_CHECKING

from sqlalchemy import String, Boolean, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sinceonearth.models.base import Base

if TYPE_CHECKING:
    from sinceonearth.models.flight import Flight


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """Application user, identified by a random UUID string."""

    __tablename__ = 'users'

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )

    username: Mapped[str] = mapped_column(
        String(30),
        unique=True,
        nullable=False,
    )

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
    )

    password_hash: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
        comment='bcrypt hash',
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    country: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
        comment='Home country, used to centre the globe view',
    )

    profile_image_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    is_admin: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=_utcnow,
        onupdate=_utcnow,
    )

    flights: Mapped[List['Flight']] = relationship(
        back_populates='user',
        cascade='all, delete-orphan',
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f'<User {self.username}{" (admin)" if self.is_admin else ""}>'

    def to_dict(self) -> dict:
        """Public representation (no password hash)."""
        return {
            'id': self.id,
            'username': self.username,
            'email': self.email,
            'name': self.name,
            'country': self.country,
            'profileImageUrl': self.profile_image_url,
            'isAdmin': self.is_admin,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None,
        }
