"""String and id helpers shared by the controllers."""

import json
import secrets
import uuid
from typing import Any


def first_letter_uppercase(value: str) -> str:
    """Title-case each space-separated word, lowercasing the rest."""
    return ' '.join(word[:1].upper() + word[1:].lower()
                    for word in value.lower().split(' '))


def lower_case(value: str) -> str:
    """Lowercase a string."""
    return value.lower()


def generate_random_integers(length: int) -> str:
    """
    Generate a random numeric string of exactly ``length`` digits.

    Leading zeros are kept, so the result always has ``length`` digits; it is
    returned as a string for that reason.
    """
    return ''.join(str(secrets.randbelow(10)) for _ in range(length))


def generate_object_id() -> str:
    """Generate a new unique record id."""
    return uuid.uuid4().hex


def parse_json(value: str) -> Any:
    """Parse ``value`` as JSON, or hand it back untouched if it is not JSON."""
    try:
        return json.loads(value)
    except (TypeError, ValueError):
        return value
