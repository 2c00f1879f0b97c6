"""
Provides access to the authoritative user store.

Reads are done by the controllers (uniqueness check on signup, credential
lookup on signin). Writes are done only by the background workers in
:mod:`chatty.tasks`.
"""

from contextlib import contextmanager
from datetime import datetime
from typing import Generator, Optional

from pytz import UTC
from sqlalchemy import or_
from sqlalchemy.exc import OperationalError
from werkzeug.local import LocalProxy

from ... import domain
from ...helpers import first_letter_uppercase, lower_case
from ...logging import getLogger
from ..exceptions import StoreUnavailable
from .models import db, DBAuthUser, DBUser

logger = getLogger(__name__)


@contextmanager
def transaction() -> Generator:
    """Context manager for database transaction."""
    try:
        yield db.session
        if db.session.new or db.session.dirty or db.session.deleted:
            db.session.commit()
    except OperationalError as e:
        logger.error('Commit failed, rolling back: %s', str(e))
        db.session.rollback()
        raise StoreUnavailable('Could not reach the database: %s' % e) from e
    except Exception as e:
        logger.error('Commit failed, rolling back: %s', str(e))
        db.session.rollback()
        raise


def init_app(app: Optional[LocalProxy]) -> None:
    """Set configuration defaults and attach session to the application."""
    db.init_app(app)


def create_all() -> None:
    """Create all tables in the database."""
    db.create_all()


def drop_all() -> None:
    """Drop all tables in the database."""
    db.drop_all()


def get_auth_user_by_username_or_email(username: str, email: str) \
        -> Optional[domain.AuthRecord]:
    """
    Get the auth record that has either this username or this email.

    Parameters
    ----------
    username : str
    email : str

    Returns
    -------
    :class:`.domain.AuthRecord` or None

    Raises
    ------
    :class:`.StoreUnavailable`
        When there is a problem querying the database.

    """
    try:
        row = db.session.query(DBAuthUser).filter(or_(
            DBAuthUser.username == first_letter_uppercase(username),
            DBAuthUser.email == lower_case(email)
        )).first()
    except OperationalError as e:
        raise StoreUnavailable('Could not query database: %s' % e) from e
    return row.to_domain() if row is not None else None


def get_auth_user_by_username(username: str) -> Optional[domain.AuthRecord]:
    """Get the auth record for a username."""
    try:
        row = db.session.query(DBAuthUser) \
            .filter(DBAuthUser.username == first_letter_uppercase(username)) \
            .first()
    except OperationalError as e:
        raise StoreUnavailable('Could not query database: %s' % e) from e
    return row.to_domain() if row is not None else None


def get_user_by_auth_id(auth_id: str) -> Optional[domain.UserProfile]:
    """Get the profile linked to an auth record."""
    try:
        row = db.session.query(DBUser) \
            .filter(DBUser.auth_id == auth_id) \
            .first()
    except OperationalError as e:
        raise StoreUnavailable('Could not query database: %s' % e) from e
    return row.to_domain() if row is not None else None


def get_user_by_id(user_id: str) -> Optional[domain.UserProfile]:
    """Get a profile by its own id."""
    try:
        row = db.session.get(DBUser, user_id)
    except OperationalError as e:
        raise StoreUnavailable('Could not query database: %s' % e) from e
    return row.to_domain() if row is not None else None


def add_auth_user(record: domain.AuthRecord) -> None:
    """
    Insert a new auth record.

    Raises
    ------
    :class:`.StoreUnavailable`
        When there is a problem reaching the database.
    :class:`sqlalchemy.exc.IntegrityError`
        When the username or email is already taken.

    """
    row = DBAuthUser(
        id=record.id,
        u_id=record.u_id,
        username=record.username,
        email=record.email,
        password=record.password,
        avatar_color=record.avatar_color,
        created_at=record.created_at or datetime.now(tz=UTC)
    )
    with transaction() as session:
        session.add(row)


def add_user(profile: domain.UserProfile) -> None:
    """Insert a new user profile."""
    row = DBUser(
        id=profile.id,
        auth_id=profile.auth_id,
        u_id=profile.u_id,
        username=profile.username,
        email=profile.email,
        password=profile.password,
        avatar_color=profile.avatar_color,
        profile_picture=profile.profile_picture,
        blocked=list(profile.blocked),
        blocked_by=list(profile.blocked_by),
        work=profile.work,
        location=profile.location,
        school=profile.school,
        quote=profile.quote,
        bg_image_version=profile.bg_image_version,
        bg_image_id=profile.bg_image_id,
        followers_count=profile.followers_count,
        following_count=profile.following_count,
        posts_count=profile.posts_count,
        notifications=profile.notifications._asdict(),
        social=profile.social._asdict(),
        created_at=profile.created_at or datetime.now(tz=UTC)
    )
    with transaction() as session:
        session.add(row)
