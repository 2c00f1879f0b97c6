"""Tests for :mod:`chatty.services.uploads`."""

from typing import Any
from unittest import TestCase, mock

import requests

from chatty.services import uploads
from chatty.services.exceptions import UploadFailed


class TestUpload(TestCase):
    """:meth:`.AssetHostSession.upload` makes a signed POST."""

    def setUp(self) -> None:
        """Make a session for a fake asset host."""
        self.session = uploads.AssetHostSession('https://assets/upload',
                                                'key', 'secret')

    @mock.patch('requests.Session.post')
    def test_upload(self, mock_post: Any) -> None:
        """The upload result is returned."""
        mock_post.return_value = mock.MagicMock(
            ok=True, json=mock.MagicMock(return_value={'public_id': 'abc',
                                                       'version': 12})
        )
        result = self.session.upload('data:image/png;base64,xx', 'abc',
                                     overwrite=True, invalidate=True)
        self.assertEqual(result, {'public_id': 'abc', 'version': 12})

        url = mock_post.call_args[0][0]
        params = mock_post.call_args[1]['data']
        self.assertEqual(url, 'https://assets/upload')
        self.assertEqual(params['public_id'], 'abc')
        self.assertEqual(params['overwrite'], 'true')
        self.assertEqual(params['api_key'], 'key')
        signed = {k: params[k] for k in
                  ('public_id', 'overwrite', 'invalidate', 'timestamp')}
        self.assertEqual(params['signature'], self.session._sign(signed))

    @mock.patch('requests.Session.post')
    def test_refused(self, mock_post: Any) -> None:
        """A non-OK response is an :class:`.UploadFailed`."""
        mock_post.return_value = mock.MagicMock(ok=False, status_code=401)
        with self.assertRaises(UploadFailed):
            self.session.upload('data:image/png;base64,xx', 'abc')

    @mock.patch('requests.Session.post')
    def test_unreachable(self, mock_post: Any) -> None:
        """A connection fault is an :class:`.UploadFailed`."""
        mock_post.side_effect = requests.exceptions.ConnectionError()
        with self.assertRaises(UploadFailed):
            self.session.upload('data:image/png;base64,xx', 'abc')
