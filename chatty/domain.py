"""Defines the core data structures for the chatty auth service."""

import re
from datetime import datetime
from typing import Any, Dict, NamedTuple, Optional, Tuple

import dateutil.parser
from pytz import UTC
from werkzeug.security import check_password_hash


class NotificationSettings(NamedTuple):
    """Which events the user wants to be notified about."""

    messages: bool = True
    reactions: bool = True
    comments: bool = True
    follows: bool = True


class SocialLinks(NamedTuple):
    """Links to the user's accounts on other networks."""

    facebook: str = ''
    instagram: str = ''
    twitter: str = ''
    youtube: str = ''


class AuthRecord(NamedTuple):
    """A login identity: the credentials, kept apart from the profile."""

    id: str
    """Identity id."""

    u_id: str
    """Numeric external id, 12 digits."""

    username: str
    """Title-cased username."""

    email: str
    """Lowercased email address."""

    password: str
    """Password hash. Never the clear-text password."""

    avatar_color: str

    created_at: Optional[datetime] = None

    def compare_password(self, password: str) -> bool:
        """Check a clear-text password against the stored hash."""
        if not self.password or not password:
            return False
        return check_password_hash(self.password, password)


class UserProfile(NamedTuple):
    """The social-profile projection of an identity."""

    id: str
    """Profile id."""

    auth_id: str
    """The :attr:`AuthRecord.id` this profile belongs to."""

    u_id: str
    username: str
    email: str
    password: str
    avatar_color: str
    profile_picture: str = ''
    blocked: Tuple[str, ...] = ()
    blocked_by: Tuple[str, ...] = ()
    work: str = ''
    location: str = ''
    school: str = ''
    quote: str = ''
    bg_image_version: str = ''
    bg_image_id: str = ''
    followers_count: int = 0
    following_count: int = 0
    posts_count: int = 0
    notifications: NotificationSettings = NotificationSettings()
    social: SocialLinks = SocialLinks()
    created_at: Optional[datetime] = None


class SessionClaims(NamedTuple):
    """Claims carried by a signed session token."""

    user_id: str
    u_id: str
    email: str
    username: str
    avatar_color: str


_NESTED = {
    'notifications': NotificationSettings,
    'social': SocialLinks,
}


def camelize(name: str) -> str:
    """Get the wire name for a field, e.g. ``avatar_color`` -> ``avatarColor``."""
    if name == 'id':
        return '_id'
    head, *tail = name.split('_')
    return head + ''.join(part.capitalize() for part in tail)


def decamelize(name: str) -> str:
    """Inverse of :func:`camelize`."""
    if name == '_id':
        return 'id'
    return re.sub(r'([A-Z])', lambda m: '_' + m.group(1).lower(), name)


def to_dict(obj: tuple) -> Dict[str, Any]:
    """
    Generate a wire-ready dict from a NamedTuple instance.

    Keys are camel-cased, child NamedTuples are converted recursively and
    datetimes become ISO-8601 strings, so the result can go straight into a
    JSON response or a queued job.

    Parameters
    ----------
    obj : tuple
        A NamedTuple instance.

    Returns
    -------
    dict

    """
    if not hasattr(obj, '_asdict'):  # NamedTuple-generated classes have this.
        return {}

    def _cast(value: Any) -> Any:
        if hasattr(value, '_asdict'):
            return to_dict(value)
        if isinstance(value, datetime):
            return value.isoformat()
        if isinstance(value, (list, tuple)):
            return [_cast(o) for o in value]
        return value

    return {camelize(key): _cast(value)
            for key, value in obj._asdict().items()}  # type: ignore


def from_dict(cls: type, data: Dict[str, Any]) -> Any:
    """
    Generate a NamedTuple instance from a wire dict.

    This is the inverse of :func:`to_dict`. Unknown keys are ignored, so a
    merged document (e.g. a profile with extra auth fields) can be loaded.
    """
    fields = cls._fields  # type: ignore
    _data = {}
    for key, value in data.items():
        field = decamelize(key)
        if field not in fields:
            continue
        if field in _NESTED and isinstance(value, dict):
            value = from_dict(_NESTED[field], value)
        elif field == 'created_at' and isinstance(value, str):
            value = parse_datetime(value)
        elif isinstance(value, list):
            value = tuple(value)
        _data[field] = value
    return cls(**_data)


def parse_datetime(value: str) -> datetime:
    """Parse an ISO-8601 timestamp, assuming UTC when no zone is given."""
    parsed = dateutil.parser.parse(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed
