"""Authoritative store models."""

from datetime import datetime

from flask_sqlalchemy import SQLAlchemy
from pytz import UTC
from sqlalchemy import JSON, Column, DateTime, Integer, String

from ... import domain

db: SQLAlchemy = SQLAlchemy()


def _utc(value: datetime) -> datetime:
    # sqlite hands back naive datetimes.
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class DBAuthUser(db.Model):  # type: ignore
    """
    Login identities.

    Username and email are unique here, which is what finally rejects a
    duplicate that slipped past the signup check.
    """

    __tablename__ = 'auth'

    id = Column(String(32), primary_key=True)
    u_id = Column(String(12), nullable=False, index=True)
    username = Column(String(64), nullable=False, unique=True)
    email = Column(String(255), nullable=False, unique=True)
    password = Column(String(255), nullable=False)
    avatar_color = Column(String(32), nullable=False, default='')
    created_at = Column(DateTime(timezone=True), nullable=False,
                        default=lambda: datetime.now(tz=UTC))

    def to_domain(self) -> domain.AuthRecord:
        """Generate an :class:`.domain.AuthRecord` from this row."""
        return domain.AuthRecord(
            id=self.id,
            u_id=self.u_id,
            username=self.username,
            email=self.email,
            password=self.password,
            avatar_color=self.avatar_color,
            created_at=_utc(self.created_at)
        )


class DBUser(db.Model):  # type: ignore
    """
    User profiles.

    ``auth_id`` is not a foreign key: the profile and its auth record are
    written by independent jobs, in no particular order.
    """

    __tablename__ = 'users'

    id = Column(String(32), primary_key=True)
    auth_id = Column(String(32), nullable=False, index=True)
    u_id = Column(String(12), nullable=False)
    username = Column(String(64), nullable=False)
    email = Column(String(255), nullable=False)
    password = Column(String(255), nullable=False)
    avatar_color = Column(String(32), nullable=False, default='')
    profile_picture = Column(String(255), nullable=False, default='')
    blocked = Column(JSON, nullable=False, default=list)
    blocked_by = Column(JSON, nullable=False, default=list)
    work = Column(String(255), nullable=False, default='')
    location = Column(String(255), nullable=False, default='')
    school = Column(String(255), nullable=False, default='')
    quote = Column(String(255), nullable=False, default='')
    bg_image_version = Column(String(64), nullable=False, default='')
    bg_image_id = Column(String(255), nullable=False, default='')
    followers_count = Column(Integer, nullable=False, default=0)
    following_count = Column(Integer, nullable=False, default=0)
    posts_count = Column(Integer, nullable=False, default=0)
    notifications = Column(JSON, nullable=False, default=dict)
    social = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), nullable=False,
                        default=lambda: datetime.now(tz=UTC))

    def to_domain(self) -> domain.UserProfile:
        """Generate a :class:`.domain.UserProfile` from this row."""
        return domain.UserProfile(
            id=self.id,
            auth_id=self.auth_id,
            u_id=self.u_id,
            username=self.username,
            email=self.email,
            password=self.password,
            avatar_color=self.avatar_color,
            profile_picture=self.profile_picture,
            blocked=tuple(self.blocked or ()),
            blocked_by=tuple(self.blocked_by or ()),
            work=self.work,
            location=self.location,
            school=self.school,
            quote=self.quote,
            bg_image_version=self.bg_image_version,
            bg_image_id=self.bg_image_id,
            followers_count=self.followers_count,
            following_count=self.following_count,
            posts_count=self.posts_count,
            notifications=domain.NotificationSettings(
                **(self.notifications or {})
            ),
            social=domain.SocialLinks(**(self.social or {})),
            created_at=_utc(self.created_at)
        )
