"""Tests for :mod:`chatty.domain`."""

from datetime import datetime
from unittest import TestCase

from pytz import UTC
from werkzeug.security import generate_password_hash

from chatty import domain


class TestWireNames(TestCase):
    """Field names are camel-cased on the wire."""

    def test_camelize(self) -> None:
        """Snake case becomes camel case, ``id`` becomes ``_id``."""
        self.assertEqual(domain.camelize('avatar_color'), 'avatarColor')
        self.assertEqual(domain.camelize('u_id'), 'uId')
        self.assertEqual(domain.camelize('id'), '_id')
        self.assertEqual(domain.camelize('email'), 'email')

    def test_decamelize(self) -> None:
        """Camel case goes back to snake case."""
        self.assertEqual(domain.decamelize('avatarColor'), 'avatar_color')
        self.assertEqual(domain.decamelize('uId'), 'u_id')
        self.assertEqual(domain.decamelize('_id'), 'id')
        self.assertEqual(domain.decamelize('blockedBy'), 'blocked_by')


class TestToDict(TestCase):
    """:func:`.domain.to_dict` produces wire-ready dicts."""

    def test_profile(self) -> None:
        """Nested tuples and datetimes are converted."""
        created = datetime(2022, 1, 2, 3, 4, 5, tzinfo=UTC)
        profile = domain.UserProfile(
            id='abc', auth_id='def', u_id='012345678901', username='Manny',
            email='manny@test.com', password='hash', avatar_color='red',
            created_at=created
        )
        data = domain.to_dict(profile)
        self.assertEqual(data['_id'], 'abc')
        self.assertEqual(data['authId'], 'def')
        self.assertEqual(data['uId'], '012345678901')
        self.assertEqual(data['createdAt'], created.isoformat())
        self.assertEqual(data['notifications'], {
            'messages': True, 'reactions': True,
            'comments': True, 'follows': True
        })
        self.assertEqual(data['social']['youtube'], '')
        self.assertEqual(data['blockedBy'], [])

    def test_not_a_namedtuple(self) -> None:
        """Anything else gives an empty dict."""
        self.assertEqual(domain.to_dict(('a', 'b')), {})


class TestFromDict(TestCase):
    """:func:`.domain.from_dict` loads wire dicts."""

    def test_profile(self) -> None:
        """Nested structures and timestamps are restored."""
        profile = domain.from_dict(domain.UserProfile, {
            '_id': 'abc', 'authId': 'def', 'uId': '012345678901',
            'username': 'Manny', 'email': 'manny@test.com',
            'password': 'hash', 'avatarColor': 'red',
            'notifications': {'messages': False, 'reactions': True,
                              'comments': True, 'follows': True},
            'social': {'twitter': '@manny'},
            'createdAt': '2022-01-02T03:04:05',
            'somethingElse': 'ignored'
        })
        self.assertEqual(profile.id, 'abc')
        self.assertFalse(profile.notifications.messages)
        self.assertEqual(profile.social.twitter, '@manny')
        self.assertEqual(profile.created_at,
                         datetime(2022, 1, 2, 3, 4, 5, tzinfo=UTC))

    def test_missing_field(self) -> None:
        """A missing required field is a TypeError."""
        with self.assertRaises(TypeError):
            domain.from_dict(domain.SessionClaims, {'userId': 'abc'})


class TestComparePassword(TestCase):
    """:meth:`.AuthRecord.compare_password` checks against the hash."""

    def setUp(self) -> None:
        """Make an auth record with a hashed password."""
        self.record = domain.AuthRecord(
            id='abc', u_id='012345678901', username='Manny',
            email='manny@test.com', password=generate_password_hash('qwerty'),
            avatar_color='red'
        )

    def test_right_password(self) -> None:
        """The right password matches."""
        self.assertTrue(self.record.compare_password('qwerty'))

    def test_wrong_password(self) -> None:
        """A wrong or empty password does not match."""
        self.assertFalse(self.record.compare_password('qwertz'))
        self.assertFalse(self.record.compare_password(''))


class TestProfileDefaults(TestCase):
    """Profiles do not share mutable state."""

    def test_blocked_lists_are_immutable(self) -> None:
        """Default blocked lists are empty tuples."""
        a = domain.UserProfile(id='a', auth_id='x', u_id='1', username='A',
                               email='a@test.com', password='',
                               avatar_color='red')
        b = domain.UserProfile(id='b', auth_id='y', u_id='2', username='B',
                               email='b@test.com', password='',
                               avatar_color='red')
        self.assertEqual(a.blocked, ())
        self.assertEqual(b.blocked_by, ())
        with self.assertRaises(AttributeError):
            a.blocked.append('x')   # type: ignore

    def test_lists_from_the_wire(self) -> None:
        """Lists loaded from a wire dict become tuples."""
        profile = domain.from_dict(domain.UserProfile, {
            '_id': 'a', 'authId': 'x', 'uId': '1', 'username': 'A',
            'email': 'a@test.com', 'password': '', 'avatarColor': 'red',
            'blocked': ['b'], 'blockedBy': []
        })
        self.assertEqual(profile.blocked, ('b',))
        self.assertEqual(profile.blocked_by, ())
        self.assertEqual(domain.to_dict(profile)['blocked'], ['b'])
