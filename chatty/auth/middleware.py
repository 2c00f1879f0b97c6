"""
Gates for routes that need a signed-in user.

:func:`verify_user` moves a request through three states. With no token in
the session it fails straight away. With a token, the signature is checked:
a bad token fails, a good one yields the decoded claims. The claims are
returned to the caller rather than stashed on the request.

:func:`check_authentication` is the second gate, for routes that need to
tell "no auth required" apart from "auth required": it fails if no verified
claims were produced.
"""

from typing import Mapping, Optional

from .. import domain
from ..exceptions import NotAuthorizedError
from ..logging import getLogger
from . import tokens
from .exceptions import InvalidToken

logger = getLogger(__name__)

NO_TOKEN = 'Token is not available, please login'
INVALID_TOKEN = 'Token is invalid, please login'
AUTH_REQUIRED = 'Authentication is required to access this route'


def verify_user(session: Optional[Mapping], secret: str) \
        -> domain.SessionClaims:
    """
    Verify the session token carried by ``session``.

    Parameters
    ----------
    session : mapping
        The server-side session; the token lives under ``jwt``.
    secret : str
        Secret the token was signed with.

    Returns
    -------
    :class:`.domain.SessionClaims`

    Raises
    ------
    :class:`.NotAuthorizedError`
        If there is no token, or it does not verify.

    """
    token = session.get('jwt') if session else None
    if not token:
        logger.debug('No session token')
        raise NotAuthorizedError(NO_TOKEN)
    try:
        return tokens.decode(token, secret)
    except InvalidToken as e:
        logger.debug('Session token not valid: %s', e)
        raise NotAuthorizedError(INVALID_TOKEN) from e


def check_authentication(claims: Optional[domain.SessionClaims]) -> None:
    """Require verified claims to be present."""
    if claims is None:
        raise NotAuthorizedError(AUTH_REQUIRED)
