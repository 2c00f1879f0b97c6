"""
Controllers for signin, signout and the current user.

Signin reads the authoritative store. Right after signup the profile may
not be there yet, since it is written by a background job; in that case the
profile is read back from the user cache instead.
"""

from datetime import datetime
from typing import Any, Dict, MutableMapping, Optional, Tuple

from flask import render_template
from pytz import UTC
from retry import retry

from .. import domain, status
from ..context import get_application_config
from ..exceptions import InvalidCredentialsError, ServerError, ValidationError
from ..logging import getLogger
from ..services import database, queues, user_cache
from ..services.exceptions import (CacheReadError, QueueError,
                                   StoreUnavailable)
from .forms import SignInForm
from .registration import public_user, sign_token

logger = getLogger(__name__)

ResponseData = Tuple[dict, int, dict]

CONFIRMATION_TEMPLATE = 'emails/reset_password_confirmation.html'
CONFIRMATION_SUBJECT = 'Password reset confirmation'


def signin(payload: Optional[Dict[str, Any]], session: MutableMapping,
           ip: str = '') -> ResponseData:
    """
    Sign in an existing user.

    Parameters
    ----------
    payload : dict
        Should include ``username`` and ``password``.
    session : mapping
        The server-side session; the new token is put under ``jwt``.
    ip : str
        Client address, shown in the confirmation email.

    Returns
    -------
    dict
        ``message``, ``user`` and ``token``.
    int
        Status code; 200 if all goes well.
    dict
        Headers to add to the response.

    Raises
    ------
    :class:`.ValidationError`
    :class:`.InvalidCredentialsError`
        Unknown username, or wrong password.
    :class:`.ServerError`

    """
    form = SignInForm(payload)
    if not form.validate():
        logger.debug('Signin payload not valid: %s', form.errors)
        raise ValidationError(form.first_error)

    try:
        auth = _find_credentials(form.username.data)
    except StoreUnavailable as e:
        logger.exception('Could not look up user %s', form.username.data)
        raise ServerError() from e
    if auth is None or not auth.compare_password(form.password.data):
        logger.debug('Bad credentials for %s', form.username.data)
        raise InvalidCredentialsError()

    profile = _find_profile(auth)
    if profile is None:
        logger.error('No profile for auth record %s', auth.id)
        raise ServerError()

    token = sign_token(auth, profile.id)
    session['jwt'] = token

    config = get_application_config()
    if config.get('SEND_SIGNIN_CONFIRMATION', True):
        _send_confirmation(auth, ip, config.get('SIGNIN_CONFIRMATION_EMAIL'))

    user = public_user(profile)
    user.update({
        'authId': auth.id,
        'username': auth.username,
        'email': auth.email,
        'avatarColor': auth.avatar_color,
        'uId': auth.u_id,
        'createdAt': auth.created_at.isoformat() if auth.created_at else None
    })
    logger.debug('Signed in %s', auth.username)
    response_data = {
        'message': 'User login successfully',
        'user': user,
        'token': token
    }
    return response_data, status.HTTP_200_OK, {}


def signout(session: MutableMapping) -> ResponseData:
    """Drop the session token."""
    session.clear()
    response_data = {'message': 'Logout successful', 'user': {}, 'token': ''}
    return response_data, status.HTTP_200_OK, {}


def current_user(claims: domain.SessionClaims, token: str) -> ResponseData:
    """
    Get the profile of the signed-in user.

    The cache is tried first; the authoritative store is the fallback.
    """
    profile: Optional[domain.UserProfile] = None
    try:
        profile = user_cache.get(claims.user_id)
    except CacheReadError:
        logger.warning('Cache read failed for %s', claims.user_id)
    if profile is None:
        try:
            profile = database.get_user_by_id(claims.user_id)
        except StoreUnavailable as e:
            raise ServerError() from e

    if profile is None:
        response_data = {'isUser': False, 'token': None, 'user': None}
    else:
        response_data = {
            'isUser': True,
            'token': token,
            'user': public_user(profile)
        }
    return response_data, status.HTTP_200_OK, {}


def _find_profile(auth: domain.AuthRecord) -> Optional[domain.UserProfile]:
    try:
        profile = _find_profile_in_store(auth.id)
    except StoreUnavailable as e:
        raise ServerError() from e
    if profile is not None:
        return profile

    logger.debug('Profile for %s not in store yet, trying cache', auth.id)
    try:
        key = user_cache.find_key(auth.u_id)
        return user_cache.get(key) if key else None
    except CacheReadError as e:
        raise ServerError() from e


def _send_confirmation(auth: domain.AuthRecord, ip: str,
                       receiver: str) -> None:
    template = render_template(
        CONFIRMATION_TEMPLATE,
        username=auth.username,
        email=auth.email,
        ipaddress=ip,
        date=datetime.now(tz=UTC).strftime('%d/%m/%Y %H:%M')
    )
    try:
        queues.add_email_job(queues.FORGOT_PASSWORD_EMAIL, {
            'template': template,
            'receiverEmail': receiver,
            'subject': CONFIRMATION_SUBJECT
        })
    except QueueError as e:
        raise ServerError() from e


@retry(StoreUnavailable, tries=3, delay=0.5, backoff=2)
def _find_credentials(username: str) -> Optional[domain.AuthRecord]:
    return database.get_auth_user_by_username(username)


@retry(StoreUnavailable, tries=3, delay=0.5, backoff=2)
def _find_profile_in_store(auth_id: str) -> Optional[domain.UserProfile]:
    return database.get_user_by_auth_id(auth_id)
