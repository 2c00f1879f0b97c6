"""Flask configuration."""
import secrets
import os

VERSION = '0.1'
"""The application version."""

#################### General config for app ####################
SECRET_KEY = os.environ.get('SECRET_KEY', secrets.token_urlsafe(16))
"""Signs the Flask session cookie that carries ``jwt``."""

SESSION_COOKIE_NAME = os.environ.get('SESSION_COOKIE_NAME', 'session')
SESSION_COOKIE_SECURE = bool(int(os.environ.get('SESSION_COOKIE_SECURE', '0')))
SESSION_COOKIE_HTTPONLY = True

CLIENT_URL = os.environ.get('CLIENT_URL', 'http://localhost:3000')

LOGLEVEL = os.environ.get('LOGLEVEL', 20)

#################### Session tokens ####################
JWT_SECRET = os.environ.get('JWT_SECRET', secrets.token_urlsafe(16))
"""Secret used to sign session tokens.

Tokens carry no expiry; rotating this secret is the only way to invalidate
them."""

#################### User cache ####################
REDIS_HOST = os.environ.get('REDIS_HOST', 'localhost')
REDIS_PORT = os.environ.get('REDIS_PORT', '6379')
REDIS_DATABASE = os.environ.get('REDIS_DATABASE', '0')

REDIS_FAKE = bool(int(os.environ.get('REDIS_FAKE', '0')))
"""Use the FakeRedis library instead of a redis service.

Useful for testing, dev."""

#################### Authoritative store ####################
SQLALCHEMY_DATABASE_URI = os.environ.get('SQLALCHEMY_DATABASE_URI',
                                         'sqlite:///chatty.db')
SQLALCHEMY_TRACK_MODIFICATIONS = False

CREATE_DB = bool(int(os.environ.get('CREATE_DB', '0')))

#################### Job queue ####################
CELERY_BROKER_URL = os.environ.get(
    'CELERY_BROKER_URL',
    f'redis://{REDIS_HOST}:{REDIS_PORT}/1'
)
CELERY_RESULT_BACKEND = os.environ.get('CELERY_RESULT_BACKEND',
                                       CELERY_BROKER_URL)
CELERY_ALWAYS_EAGER = bool(int(os.environ.get('CELERY_ALWAYS_EAGER', '0')))
"""Run queued jobs in-process. For dev/test only."""

#################### Avatar uploads ####################
CLOUD_NAME = os.environ.get('CLOUD_NAME', 'chatty')
CLOUD_API_KEY = os.environ.get('CLOUD_API_KEY', 'nope')
CLOUD_API_SECRET = os.environ.get('CLOUD_API_SECRET', 'nope')
CLOUD_UPLOAD_URL = os.environ.get(
    'CLOUD_UPLOAD_URL',
    f'https://api.cloudinary.com/v1_1/{CLOUD_NAME}/image/upload'
)
CLOUD_ASSET_URL = os.environ.get(
    'CLOUD_ASSET_URL',
    f'https://res.cloudinary.com/{CLOUD_NAME}/image/upload'
)
"""Base URL for profile pictures: ``<CLOUD_ASSET_URL>/v<version>/<id>``."""

#################### Email ####################
SENDER_EMAIL = os.environ.get('SENDER_EMAIL', 'noreply@chatty.local')
SENDER_EMAIL_PASSWORD = os.environ.get('SENDER_EMAIL_PASSWORD', '')
SMTP_HOST = os.environ.get('SMTP_HOST', 'smtp.ethereal.email')
SMTP_PORT = os.environ.get('SMTP_PORT', '587')
SMTP_USE_TLS = bool(int(os.environ.get('SMTP_USE_TLS', '1')))

SEND_SIGNIN_CONFIRMATION = bool(int(
    os.environ.get('SEND_SIGNIN_CONFIRMATION', '1')
))
"""Enqueue a password reset confirmation email on every signin.

This reproduces observed behavior that looks like leftover test wiring. Set
to ``0`` to switch it off."""

SIGNIN_CONFIRMATION_EMAIL = os.environ.get(
    'SIGNIN_CONFIRMATION_EMAIL',
    'talia.buckridge47@ethereal.email'
)
"""Fixed receiver of the signin confirmation email."""
