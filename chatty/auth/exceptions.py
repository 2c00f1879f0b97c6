"""Exceptions raised while working with session tokens."""


class InvalidToken(ValueError):
    """Token is not valid: bad signature, malformed, or missing claims."""
