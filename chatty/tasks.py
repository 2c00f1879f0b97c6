"""
Background tasks that drain the job queues.

Task names are the job names used by :mod:`chatty.services.queues`, and
take the same keyword arguments that the jobs carry.
"""

from typing import Any, Dict

from celery import shared_task
from sqlalchemy.exc import IntegrityError

from . import domain
from .logging import getLogger
from .services import database, mail, queues
from .services.exceptions import EmailDeliveryFailed, StoreUnavailable

logger = getLogger(__name__)


@shared_task(name=queues.ADD_AUTH_USER, autoretry_for=(StoreUnavailable,),
             max_retries=3, retry_backoff=True)
def add_auth_user_to_db(value: Dict[str, Any]) -> None:
    """
    Insert an auth record into the authoritative store.

    Parameters
    ----------
    value : dict
        Wire representation of a :class:`.domain.AuthRecord`.

    """
    record = domain.from_dict(domain.AuthRecord, value)
    try:
        database.add_auth_user(record)
    except IntegrityError:
        logger.error('Auth record %s conflicts with an existing user',
                     record.id)
        raise
    logger.info('Stored auth record %s', record.id)


@shared_task(name=queues.ADD_USER, autoretry_for=(StoreUnavailable,),
             max_retries=3, retry_backoff=True)
def add_user_to_db(value: Dict[str, Any]) -> None:
    """Insert a user profile into the authoritative store."""
    profile = domain.from_dict(domain.UserProfile, value)
    try:
        database.add_user(profile)
    except IntegrityError:
        logger.error('Profile %s already stored', profile.id)
        raise
    logger.info('Stored profile %s', profile.id)


@shared_task(name=queues.FORGOT_PASSWORD_EMAIL,
             autoretry_for=(EmailDeliveryFailed,), max_retries=3,
             retry_backoff=True)
def send_password_email(template: str, receiverEmail: str,
                        subject: str) -> None:
    """Deliver a rendered email."""
    mail.send_email(receiverEmail, subject, template)
