"""The uploads service puts images on the asset host."""

import hashlib
import json
import time
from functools import wraps
from typing import Any, Dict

import requests

from ..context import get_application_config, get_application_global
from ..logging import getLogger
from .exceptions import UploadFailed

logger = getLogger(__name__)


class AssetHostSession(object):
    """An HTTP session with the asset host's upload API."""

    def __init__(self, upload_url: str, api_key: str, api_secret: str) -> None:
        """Create a new HTTP session."""
        self.upload_url = upload_url
        self._api_key = api_key
        self._api_secret = api_secret
        self._session = requests.Session()
        self._adapter = requests.adapters.HTTPAdapter(max_retries=2)
        self._session.mount('https://', self._adapter)
        self._session.mount('http://', self._adapter)
        logger.debug('New AssetHostSession at %s', upload_url)

    def _sign(self, params: Dict[str, Any]) -> str:
        payload = '&'.join(f'{key}={params[key]}' for key in sorted(params))
        return hashlib.sha1(
            (payload + self._api_secret).encode('utf-8')
        ).hexdigest()

    def upload(self, file: str, public_id: str, overwrite: bool = False,
               invalidate: bool = False) -> Dict[str, Any]:
        """
        Upload an image.

        Parameters
        ----------
        file : str
            The image, as a base64 data URI.
        public_id : str
            The id under which the image will be stored.
        overwrite : bool
            Replace an existing image with the same ``public_id``.
        invalidate : bool
            Invalidate CDN copies of a replaced image.

        Returns
        -------
        dict
            Includes at least ``public_id`` and ``version``.

        Raises
        ------
        :class:`.UploadFailed`
            If the asset host can't be reached, or refuses the image.

        """
        params: Dict[str, Any] = {
            'public_id': public_id,
            'overwrite': str(overwrite).lower(),
            'invalidate': str(invalidate).lower(),
            'timestamp': int(time.time())
        }
        params['signature'] = self._sign(params)
        params['api_key'] = self._api_key
        params['file'] = file
        try:
            response = self._session.post(self.upload_url, data=params)
        except requests.exceptions.RequestException as e:
            raise UploadFailed('Could not reach the asset host') from e
        if not response.ok:
            logger.debug('Asset host responded with status %i',
                         response.status_code)
            raise UploadFailed('Upload refused: %i' % response.status_code)
        try:
            data: Dict[str, Any] = response.json()
        except json.decoder.JSONDecodeError as e:
            logger.debug('Asset host response could not be decoded')
            raise UploadFailed('Could not read the upload result') from e
        return data


def init_app(app: object = None) -> None:
    """Set default configuration parameters for an application instance."""
    config = get_application_config(app)
    config.setdefault('CLOUD_NAME', 'chatty')
    config.setdefault('CLOUD_UPLOAD_URL',
                      'https://api.cloudinary.com/v1_1/chatty/image/upload')
    config.setdefault('CLOUD_ASSET_URL',
                      'https://res.cloudinary.com/chatty/image/upload')
    config.setdefault('CLOUD_API_KEY', '')
    config.setdefault('CLOUD_API_SECRET', '')


def get_session(app: object = None) -> AssetHostSession:
    """Get a new session with the asset host."""
    config = get_application_config(app)
    return AssetHostSession(config.get('CLOUD_UPLOAD_URL'),
                            config.get('CLOUD_API_KEY', ''),
                            config.get('CLOUD_API_SECRET', ''))


def current_session() -> AssetHostSession:
    """Get/create :class:`.AssetHostSession` for this context."""
    g = get_application_global()
    if not g:
        return get_session()
    if 'uploads' not in g:
        g.uploads = get_session()
    return g.uploads    # type: ignore


@wraps(AssetHostSession.upload)
def upload(file: str, public_id: str, overwrite: bool = False,
           invalidate: bool = False) -> Dict[str, Any]:
    """Upload an image to the asset host."""
    return current_session().upload(file, public_id, overwrite=overwrite,
                                    invalidate=invalidate)
