"""
Protect Flask routes with the session token gates.

.. code-block:: python

   @blueprint.route('/currentuser', methods=['GET'])
   @authenticated
   def current_user(current_user: domain.SessionClaims) -> Response:
       ...

The decorated view gets the verified claims as the ``current_user`` keyword
argument.
"""

from functools import wraps
from typing import Any, Callable

from flask import current_app, session

from .middleware import check_authentication, verify_user


def authenticated(func: Callable) -> Callable:
    """Run both gates, then call the view with ``current_user``."""
    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        claims = verify_user(session, current_app.config['JWT_SECRET'])
        check_authentication(claims)
        return func(*args, current_user=claims, **kwargs)
    return wrapper
