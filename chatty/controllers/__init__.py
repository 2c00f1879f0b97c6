"""
Request controllers.

Controllers take request data and return a ``(data, status, headers)``
tuple. They raise :mod:`werkzeug.exceptions` subclasses from
:mod:`chatty.exceptions` for anything that should become an error response.
"""
