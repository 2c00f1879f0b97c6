"""Tests for :mod:`chatty.services.queues`."""

from typing import Any
from unittest import TestCase, mock

from kombu.exceptions import OperationalError

from chatty.services import queues
from chatty.services.exceptions import QueueError


class TestAddJob(TestCase):
    """:meth:`.JobQueue.add_job` hands jobs to the broker."""

    @mock.patch(f'{queues.__name__}.current_app')
    def test_add_job(self, mock_app: Any) -> None:
        """The job is sent to the named queue, with data as kwargs."""
        mock_app.conf.task_always_eager = False
        queues.add_auth_user_job({'value': {'_id': 'abc'}})
        mock_app.send_task.assert_called_once_with(
            'addAuthUserToDB', kwargs={'value': {'_id': 'abc'}}, queue='auth'
        )

    @mock.patch(f'{queues.__name__}.current_app')
    def test_queue_names(self, mock_app: Any) -> None:
        """Each job goes to its own queue."""
        mock_app.conf.task_always_eager = False
        queues.add_user_job({'value': {}})
        queues.add_email_job('forgotPasswordEmail', {'template': ''})
        calls = mock_app.send_task.call_args_list
        self.assertEqual(calls[0][0][0], 'addUserToDB')
        self.assertEqual(calls[0][1]['queue'], 'user')
        self.assertEqual(calls[1][0][0], 'forgotPasswordEmail')
        self.assertEqual(calls[1][1]['queue'], 'email')

    @mock.patch(f'{queues.__name__}.current_app')
    def test_eager(self, mock_app: Any) -> None:
        """In eager mode the registered task is run in-process."""
        mock_app.conf.task_always_eager = True
        mock_task = mock.MagicMock()
        mock_task.apply.return_value.failed.return_value = False
        mock_app.tasks = {'addUserToDB': mock_task}
        queues.add_user_job({'value': {'_id': 'abc'}})
        mock_task.apply.assert_called_once_with(
            kwargs={'value': {'_id': 'abc'}}
        )
        mock_app.send_task.assert_not_called()

    @mock.patch(f'{queues.__name__}.current_app')
    def test_eager_failure_is_logged(self, mock_app: Any) -> None:
        """A job that fails in eager mode is logged, not raised."""
        mock_app.conf.task_always_eager = True
        mock_task = mock.MagicMock()
        mock_task.apply.return_value.failed.return_value = True
        mock_task.apply.return_value.result = RuntimeError('insert failed')
        mock_app.tasks = {'addAuthUserToDB': mock_task}
        with self.assertLogs(queues.__name__, level='ERROR') as logs:
            queues.add_auth_user_job({'value': {'_id': 'abc'}})
        self.assertIn('insert failed', logs.output[0])

    @mock.patch(f'{queues.__name__}.current_app')
    def test_broker_down(self, mock_app: Any) -> None:
        """A broker fault is a :class:`.QueueError`."""
        mock_app.conf.task_always_eager = False
        mock_app.send_task.side_effect = OperationalError('nope')
        with self.assertRaises(QueueError):
            queues.add_auth_user_job({'value': {}})
