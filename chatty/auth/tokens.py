"""
Functions for working with session tokens.

A session token is an HS256 JWT over the claims in
:class:`.domain.SessionClaims`. There is no expiry claim: a token stays
valid until the secret is rotated.
"""

import jwt

from .. import domain
from .exceptions import InvalidToken


def encode(claims: domain.SessionClaims, secret: str) -> str:
    """Encode session claims as a signed JWT."""
    return jwt.encode(domain.to_dict(claims), secret, algorithm='HS256')


def decode(token: str, secret: str) -> domain.SessionClaims:
    """Verify a token and get the session claims it carries."""
    try:
        data: dict = jwt.decode(token, secret, algorithms=['HS256'])
    except jwt.exceptions.InvalidTokenError as e:
        raise InvalidToken('Not a valid token') from e
    try:
        return domain.from_dict(domain.SessionClaims, data)
    except TypeError as e:     # A claim is missing.
        raise InvalidToken('Token payload malformed') from e
