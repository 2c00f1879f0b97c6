"""Provides a unified API for sending email."""

import smtplib
from email.message import EmailMessage
from functools import wraps

from ..context import get_application_config
from ..logging import getLogger
from .exceptions import EmailDeliveryFailed

logger = getLogger(__name__)


class MailSession(object):
    """An SMTP service that we can send HTML email through."""

    def __init__(self, host: str = "", port: int = 0, user: str = "",
                 password: str = "", use_tls: bool = True) -> None:
        self._host = host
        self._port = port
        self._user = user
        self._password = password
        self._use_tls = use_tls

    def _new_connection(self) -> smtplib.SMTP:
        return smtplib.SMTP(
            host=self._host,
            port=self._port
        )

    def send_email(self, receiver: str, subject: str, body: str) -> None:
        """
        Send an HTML email.

        Raises
        ------
        :class:`.EmailDeliveryFailed`
            When the SMTP service can't be reached or refuses the message.
        """
        message = EmailMessage()
        message['From'] = f'Chatty App <{self._user}>'
        message['To'] = receiver
        message['Subject'] = subject
        message.set_content(body, subtype='html')
        try:
            with self._new_connection() as conn:
                if self._use_tls:
                    conn.starttls()
                if self._password:
                    conn.login(self._user, self._password)
                conn.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error('Error sending email to %s: %s', receiver, e)
            raise EmailDeliveryFailed('Error sending email') from e
        logger.info('Email sent to %s', receiver)


def get_mail_session(app: object = None) -> MailSession:
    """Get a new :class:`.MailSession` from application config."""
    config = get_application_config(app)
    return MailSession(
        host=config.get('SMTP_HOST', 'localhost'),
        port=int(config.get('SMTP_PORT', '587')),
        user=config.get('SENDER_EMAIL', ''),
        password=config.get('SENDER_EMAIL_PASSWORD', ''),
        use_tls=str(config.get('SMTP_USE_TLS', True)) in ('1', 'True', 'true')
    )


@wraps(MailSession.send_email)
def send_email(receiver: str, subject: str, body: str) -> None:
    """Send an HTML email."""
    get_mail_session().send_email(receiver, subject, body)
