"""
Provides the user cache.

Each user is kept as a redis hash under ``user:<key>``, where ``key`` is the
profile id. Every value in the hash is a string: scalars are stringified and
nested structures (the blocked lists, notification settings and social
links) are JSON-encoded. The password hash is not cached; profiles read
back from the cache carry an empty ``password``. A sorted set ``user`` maps the profile id to the
numeric external id (``uId``), and is used to order users.
"""

import json
from datetime import datetime
from functools import wraps
from typing import Dict, Optional

import fakeredis
import redis
from pytz import UTC

from .. import domain
from ..context import get_application_config, get_application_global
from ..helpers import parse_json
from ..logging import getLogger
from .exceptions import CacheReadError, CacheWriteError

logger = getLogger(__name__)

INDEX_KEY = 'user'
_FAKE_SERVER = fakeredis.FakeServer()
_JSON_FIELDS = ('blocked', 'blockedBy', 'notifications', 'social')
_INT_FIELDS = ('followersCount', 'followingCount', 'postsCount')


class UserCache(object):
    """
    Manages a connection to Redis.

    The connection is opened on the first operation rather than when the
    cache is created; the StrictRedis instance itself attaches connections
    at the time a command is executed.
    """

    def __init__(self, host: str, port: int, database: int,
                 fake: bool = False) -> None:
        """Hold on to the connection parameters."""
        self._host = host
        self._port = port
        self._database = database
        self._fake = fake
        self._r: Optional[redis.StrictRedis] = None

    @property
    def is_open(self) -> bool:
        """Whether a connection to Redis has been opened."""
        return self._r is not None

    def connect(self) -> redis.StrictRedis:
        """Open the connection to Redis, if it is not already open."""
        if self._r is None:
            logger.debug('New Redis connection at %s, port %s',
                         self._host, self._port)
            if self._fake:
                self._r = fakeredis.FakeStrictRedis(server=_FAKE_SERVER,
                                                   decode_responses=True)
            else:
                self._r = redis.StrictRedis(host=self._host, port=self._port,
                                            db=self._database,
                                            decode_responses=True)
        return self._r

    def save(self, key: str, user_id: str,
             profile: domain.UserProfile) -> None:
        """
        Write a user profile to the cache.

        Parameters
        ----------
        key : str
            The profile id.
        user_id : str
            The numeric external id (``uId``); the score in the user index.
        profile : :class:`.domain.UserProfile`

        Raises
        ------
        :class:`.CacheWriteError`
            Raised when the store fails in any way.
        """
        data = _flatten(profile)
        try:
            r = self.connect()
            r.zadd(INDEX_KEY, {key: int(user_id)})
            r.hset(f'user:{key}', mapping=data)
        except Exception as e:
            logger.error('Error saving user %s to cache: %s', key, e)
            raise CacheWriteError('Error saving user to cache') from e

    def get(self, user_id: str) -> Optional[domain.UserProfile]:
        """
        Read a user profile back from the cache.

        Parameters
        ----------
        user_id : str
            The profile id that was used as the key on :meth:`save`.

        Returns
        -------
        :class:`.domain.UserProfile` or None
            None if the user is not in the cache.

        Raises
        ------
        :class:`.CacheReadError`
            Raised when the store fails in any way.
        """
        try:
            data: Dict[str, str] = self.connect().hgetall(f'user:{user_id}')
        except Exception as e:
            logger.error('Error reading user %s from cache: %s', user_id, e)
            raise CacheReadError('Error reading user from cache') from e
        if not data:
            return None
        return _inflate(data)

    def find_key(self, u_id: str) -> Optional[str]:
        """Look up the cache key for a numeric external id in the index."""
        score = int(u_id)
        try:
            keys = self.connect().zrangebyscore(INDEX_KEY, score, score)
        except Exception as e:
            logger.error('Error reading user index for %s: %s', u_id, e)
            raise CacheReadError('Error reading user from cache') from e
        return keys[0] if keys else None


def _flatten(profile: domain.UserProfile) -> Dict[str, str]:
    data = domain.to_dict(profile)
    data.pop('password', None)
    if not data.get('createdAt'):
        data['createdAt'] = datetime.now(tz=UTC).isoformat()
    flat = {}
    for name, value in data.items():
        if name in _JSON_FIELDS:
            flat[name] = json.dumps(value)
        else:
            flat[name] = f'{value}'
    return flat


def _inflate(data: Dict[str, str]) -> domain.UserProfile:
    values: Dict = dict(data)
    values.setdefault('password', '')
    for name in _JSON_FIELDS:
        if name in values:
            values[name] = parse_json(values[name])
    for name in _INT_FIELDS:
        if name in values:
            values[name] = int(values[name])
    if 'createdAt' in values:
        values['createdAt'] = domain.parse_datetime(values['createdAt'])
    return domain.from_dict(domain.UserProfile, values)


def init_app(app: object = None) -> None:
    """Set default configuration parameters for an application instance."""
    config = get_application_config(app)
    config.setdefault('REDIS_HOST', 'localhost')
    config.setdefault('REDIS_PORT', '6379')
    config.setdefault('REDIS_DATABASE', '0')
    config.setdefault('REDIS_FAKE', False)


def get_user_cache(app: object = None) -> UserCache:
    """Get a new :class:`.UserCache` from application config."""
    config = get_application_config(app)
    host = config.get('REDIS_HOST', 'localhost')
    port = int(config.get('REDIS_PORT', '6379'))
    database = int(config.get('REDIS_DATABASE', '0'))
    fake = str(config.get('REDIS_FAKE', False)) in ('1', 'True', 'true')
    return UserCache(host, port, database, fake=fake)


def current_cache() -> UserCache:
    """Get/create :class:`.UserCache` for this context."""
    g = get_application_global()
    if not g:
        return get_user_cache()
    if 'user_cache' not in g:
        g.user_cache = get_user_cache()
    return g.user_cache      # type: ignore


@wraps(UserCache.save)
def save(key: str, user_id: str, profile: domain.UserProfile) -> None:
    """Write a user profile to the cache."""
    return current_cache().save(key, user_id, profile)


@wraps(UserCache.get)
def get(user_id: str) -> Optional[domain.UserProfile]:
    """Read a user profile from the cache."""
    return current_cache().get(user_id)


@wraps(UserCache.find_key)
def find_key(u_id: str) -> Optional[str]:
    """Look up the cache key for a numeric external id."""
    return current_cache().find_key(u_id)
