"""Tests for :mod:`chatty.auth`."""

from unittest import TestCase

import jwt
from flask import Flask, jsonify

from chatty import domain
from chatty.auth import middleware, tokens
from chatty.auth.decorators import authenticated
from chatty.auth.exceptions import InvalidToken
from chatty.exceptions import NotAuthorizedError

SECRET = 'foosecret'
CLAIMS = domain.SessionClaims(
    user_id='abc123',
    u_id='012345678901',
    email='manny@test.com',
    username='Manny',
    avatar_color='red'
)


class TestTokens(TestCase):
    """Session tokens are signed JWTs over the session claims."""

    def test_encode_decode(self) -> None:
        """A token decodes to the claims it was made from."""
        token = tokens.encode(CLAIMS, SECRET)
        self.assertEqual(tokens.decode(token, SECRET), CLAIMS)

    def test_wire_claims(self) -> None:
        """Claims are camel-cased in the token payload."""
        payload = jwt.decode(tokens.encode(CLAIMS, SECRET), SECRET,
                             algorithms=['HS256'])
        self.assertEqual(payload, {
            'userId': 'abc123',
            'uId': '012345678901',
            'email': 'manny@test.com',
            'username': 'Manny',
            'avatarColor': 'red'
        })

    def test_wrong_secret(self) -> None:
        """A token signed with another secret does not verify."""
        token = tokens.encode(CLAIMS, 'othersecret')
        with self.assertRaises(InvalidToken):
            tokens.decode(token, SECRET)

    def test_garbage(self) -> None:
        """Something that is not a JWT does not verify."""
        with self.assertRaises(InvalidToken):
            tokens.decode('not.a.token', SECRET)

    def test_missing_claims(self) -> None:
        """A validly signed token without the claims does not verify."""
        token = jwt.encode({'userId': 'abc123'}, SECRET, algorithm='HS256')
        with self.assertRaises(InvalidToken):
            tokens.decode(token, SECRET)


class TestVerifyUser(TestCase):
    """:func:`.middleware.verify_user` checks the session token."""

    def test_no_session(self) -> None:
        """With no token, fails with a message about logging in."""
        for session in (None, {}, {'jwt': ''}):
            with self.assertRaises(NotAuthorizedError) as ctx:
                middleware.verify_user(session, SECRET)
            self.assertEqual(ctx.exception.description,
                             'Token is not available, please login')

    def test_bad_token(self) -> None:
        """With a bad token, fails with a message about the token."""
        session = {'jwt': tokens.encode(CLAIMS, 'othersecret')}
        with self.assertRaises(NotAuthorizedError) as ctx:
            middleware.verify_user(session, SECRET)
        self.assertEqual(ctx.exception.description,
                         'Token is invalid, please login')
        self.assertEqual(ctx.exception.code, 401)

    def test_good_token(self) -> None:
        """With a good token, returns the claims."""
        session = {'jwt': tokens.encode(CLAIMS, SECRET)}
        self.assertEqual(middleware.verify_user(session, SECRET), CLAIMS)


class TestCheckAuthentication(TestCase):
    """:func:`.middleware.check_authentication` requires claims."""

    def test_no_claims(self) -> None:
        """Fails without claims."""
        with self.assertRaises(NotAuthorizedError) as ctx:
            middleware.check_authentication(None)
        self.assertEqual(ctx.exception.description,
                         'Authentication is required to access this route')

    def test_claims(self) -> None:
        """Passes with claims."""
        self.assertIsNone(middleware.check_authentication(CLAIMS))


class TestAuthenticatedDecorator(TestCase):
    """:func:`.authenticated` protects a route."""

    def setUp(self) -> None:
        """Make a tiny app with a protected route."""
        self.app = Flask('test')
        self.app.config['SECRET_KEY'] = 'cookiesecret'
        self.app.config['JWT_SECRET'] = SECRET

        @self.app.route('/protected')
        @authenticated
        def protected(current_user: domain.SessionClaims):     # type: ignore
            return jsonify({'username': current_user.username})

        @self.app.route('/login')
        def login():     # type: ignore
            from flask import session
            session['jwt'] = tokens.encode(CLAIMS, SECRET)
            return 'ok'

        self.client = self.app.test_client()

    def test_without_session(self) -> None:
        """The view is not reached without a session token."""
        response = self.client.get('/protected')
        self.assertEqual(response.status_code, 401)

    def test_with_session(self) -> None:
        """The view gets the claims as ``current_user``."""
        self.client.get('/login')
        response = self.client.get('/protected')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json(), {'username': 'Manny'})
