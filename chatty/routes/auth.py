"""Provides the JSON API for signup, signin and the session."""

from flask import Blueprint, Response, jsonify, make_response, request, \
    session
from werkzeug.exceptions import HTTPException

from .. import domain, status
from ..auth.decorators import authenticated
from ..controllers import authentication, registration
from ..exceptions import ServerError
from ..logging import getLogger

logger = getLogger(__name__)

blueprint = Blueprint('auth', __name__, url_prefix='/api/v1')


@blueprint.route('/signup', methods=['POST'])
def signup() -> Response:
    """Create a new user."""
    data, code, headers = registration.signup(request.get_json(silent=True),
                                              session)
    return make_response(jsonify(data), code, headers)


@blueprint.route('/signin', methods=['POST'])
def signin() -> Response:
    """Sign in with username and password."""
    data, code, headers = authentication.signin(
        request.get_json(silent=True),
        session,
        request.remote_addr or ''
    )
    return make_response(jsonify(data), code, headers)


@blueprint.route('/signout', methods=['GET'])
def signout() -> Response:
    """Drop the session."""
    data, code, headers = authentication.signout(session)
    return make_response(jsonify(data), code, headers)


@blueprint.route('/currentuser', methods=['GET'])
@authenticated
def get_current_user(current_user: domain.SessionClaims) -> Response:
    """Get the profile of the signed-in user."""
    data, code, headers = authentication.current_user(current_user,
                                                      session.get('jwt'))
    return make_response(jsonify(data), code, headers)


@blueprint.route('/health', methods=['GET'])
def health() -> Response:
    """Liveness check."""
    return make_response('OK', status.HTTP_200_OK)


@blueprint.app_errorhandler(HTTPException)
def handle_http_exception(error: HTTPException) -> Response:
    """Render an HTTP error as ``{"message": ...}``."""
    response = jsonify({'message': error.description})
    response.status_code = error.code or status.HTTP_500_INTERNAL_SERVER_ERROR
    return response


@blueprint.app_errorhandler(Exception)
def handle_exception(error: Exception) -> Response:
    """Log an unexpected error, and hide it from the client."""
    if isinstance(error, HTTPException):
        return handle_http_exception(error)
    logger.exception('Unhandled exception: %s', error)
    response = jsonify({'message': ServerError.description})
    response.status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return response
