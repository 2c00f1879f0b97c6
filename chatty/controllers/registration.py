"""
Controller for signup.

A new identity is checked for uniqueness, its avatar is uploaded, and the
denormalized profile is written to the user cache. The auth record and the
profile are then queued for insertion into the authoritative store, and the
response goes out without waiting for either job.

The uniqueness check and the cache write are not atomic: two concurrent
signups with the same username can both pass the check. Only the unique
constraints of the authoritative store catch that, when the worker inserts
the second record.
"""

from datetime import datetime
from typing import Any, Dict, MutableMapping, Optional, Tuple

from pytz import UTC
from retry import retry
from werkzeug.security import generate_password_hash

from .. import domain, helpers, status
from ..auth import tokens
from ..context import get_application_config
from ..exceptions import (DuplicateUserError, ServerError, UploadError,
                          ValidationError)
from ..logging import getLogger
from ..services import database, queues, uploads, user_cache
from ..services.exceptions import (CacheWriteError, QueueError,
                                   StoreUnavailable, UploadFailed)
from .forms import SignUpForm

logger = getLogger(__name__)

ResponseData = Tuple[dict, int, dict]

UID_LENGTH = 12


def signup(payload: Optional[Dict[str, Any]],
           session: MutableMapping) -> ResponseData:
    """
    Create a new user, and sign them in.

    Parameters
    ----------
    payload : dict
        Should include ``username``, ``email``, ``password``,
        ``avatarColor`` and ``avatarImage`` (a base64 data URI).
    session : mapping
        The server-side session; the new token is put under ``jwt``.

    Returns
    -------
    dict
        ``message``, ``user`` and ``token``.
    int
        Status code; 201 if all goes well.
    dict
        Headers to add to the response.

    Raises
    ------
    :class:`.ValidationError`
    :class:`.DuplicateUserError`
    :class:`.UploadError`
    :class:`.ServerError`
        When the store, the cache or the queue fail.

    """
    form = SignUpForm(payload)
    if not form.validate():
        logger.debug('Signup payload not valid: %s', form.errors)
        raise ValidationError(form.first_error)

    username = form.username.data
    email = form.email.data

    try:
        existing = _find_existing(username, email)
    except StoreUnavailable as e:
        logger.exception('Could not check for existing user %s', username)
        raise ServerError() from e
    if existing is not None:
        logger.debug('User %s already exists', username)
        raise DuplicateUserError()

    auth_id = helpers.generate_object_id()
    user_id = helpers.generate_object_id()
    u_id = helpers.generate_random_integers(UID_LENGTH)

    auth = signup_data(auth_id, u_id, username, email, form.password.data,
                       form.avatarColor.data)

    try:
        result = uploads.upload(form.avatarImage.data, user_id,
                                overwrite=True, invalidate=True)
    except UploadFailed as e:
        logger.error('Avatar upload failed for %s: %s', user_id, e)
        raise UploadError() from e
    if not result or not result.get('public_id'):
        raise UploadError()

    profile = user_data(auth, user_id)._replace(
        profile_picture=_profile_picture_url(result['version'], user_id)
    )

    try:
        user_cache.save(user_id, u_id, profile)
    except CacheWriteError as e:
        raise ServerError() from e

    try:
        queues.add_auth_user_job({'value': domain.to_dict(auth)})
        queues.add_user_job({'value': domain.to_dict(profile)})
    except QueueError as e:
        raise ServerError() from e

    token = sign_token(auth, user_id)
    session['jwt'] = token
    logger.debug('Created user %s (%s)', user_id, auth.username)

    response_data = {
        'message': 'User created successfully',
        'user': public_user(profile),
        'token': token
    }
    return response_data, status.HTTP_201_CREATED, {}


def signup_data(auth_id: str, u_id: str, username: str, email: str,
                password: str, avatar_color: str) -> domain.AuthRecord:
    """Build the auth record for a new identity."""
    return domain.AuthRecord(
        id=auth_id,
        u_id=u_id,
        username=helpers.first_letter_uppercase(username),
        email=helpers.lower_case(email),
        password=generate_password_hash(password),
        avatar_color=avatar_color,
        created_at=datetime.now(tz=UTC)
    )


def user_data(auth: domain.AuthRecord, user_id: str) -> domain.UserProfile:
    """Build the default profile for a new identity."""
    return domain.UserProfile(
        id=user_id,
        auth_id=auth.id,
        u_id=auth.u_id,
        username=helpers.first_letter_uppercase(auth.username),
        email=auth.email,
        password=auth.password,
        avatar_color=auth.avatar_color,
        created_at=auth.created_at
    )


def sign_token(auth: domain.AuthRecord, user_id: str) -> str:
    """Sign a session token for a user."""
    claims = domain.SessionClaims(
        user_id=user_id,
        u_id=auth.u_id,
        email=auth.email,
        username=auth.username,
        avatar_color=auth.avatar_color
    )
    return tokens.encode(claims, get_application_config()['JWT_SECRET'])


def public_user(profile: domain.UserProfile) -> Dict[str, Any]:
    """Wire representation of a profile, without the password hash."""
    data = domain.to_dict(profile)
    data.pop('password', None)
    return data


def _profile_picture_url(version: Any, user_id: str) -> str:
    base = get_application_config().get('CLOUD_ASSET_URL')
    return f'{base}/v{version}/{user_id}'


@retry(StoreUnavailable, tries=3, delay=0.5, backoff=2)
def _find_existing(username: str, email: str) -> Optional[domain.AuthRecord]:
    return database.get_auth_user_by_username_or_email(username, email)
