"""
Provides the job queues used to defer work to background workers.

Jobs are fire-and-forget: :meth:`JobQueue.add_job` returns as soon as the
broker has accepted the message, and nothing waits for a worker to pick it
up. Job names and payload shapes are the interface with the workers in
:mod:`chatty.tasks`, and with any other worker draining the same queues.
"""

from typing import Any, Dict

from celery import current_app

from ..logging import getLogger
from .exceptions import QueueError

logger = getLogger(__name__)

ADD_AUTH_USER = 'addAuthUserToDB'
ADD_USER = 'addUserToDB'
FORGOT_PASSWORD_EMAIL = 'forgotPasswordEmail'


class JobQueue(object):
    """A named queue on the Celery broker."""

    def __init__(self, name: str) -> None:
        self.name = name

    def add_job(self, job_name: str, data: Dict[str, Any]) -> None:
        """
        Put a job on this queue.

        Parameters
        ----------
        job_name : str
            Name of the task that will handle the job.
        data : dict
            Keyword arguments for the task. Must be JSON-serializable.

        Raises
        ------
        :class:`.QueueError`
            Raised when the broker does not accept the job.
        """
        try:
            if current_app.conf.task_always_eager:
                # send_task ignores eager mode; run the registered task here.
                result = current_app.tasks[job_name].apply(kwargs=data)
                if result.failed():
                    logger.error('Eager %s job failed: %s', job_name,
                                 result.result)
            else:
                current_app.send_task(job_name, kwargs=data, queue=self.name)
        except Exception as e:
            logger.error('Could not add %s job to %s queue: %s',
                         job_name, self.name, e)
            raise QueueError(f'Could not add {job_name} job') from e
        logger.debug('Added %s job to %s queue', job_name, self.name)


auth_queue = JobQueue('auth')
user_queue = JobQueue('user')
email_queue = JobQueue('email')


def add_auth_user_job(data: Dict[str, Any]) -> None:
    """Queue an auth record for insertion into the authoritative store."""
    auth_queue.add_job(ADD_AUTH_USER, data)


def add_user_job(data: Dict[str, Any]) -> None:
    """Queue a user profile for insertion into the authoritative store."""
    user_queue.add_job(ADD_USER, data)


def add_email_job(job_name: str, data: Dict[str, Any]) -> None:
    """Queue an email for delivery."""
    email_queue.add_job(job_name, data)
