"""
Celery configuration module.

See `the celery docs
<http://docs.celeryproject.org/en/latest/userguide/configuration.html>`_.
"""

import os

from kombu import Queue

REDIS_HOST = os.environ.get('REDIS_HOST', 'localhost')
REDIS_PORT = os.environ.get('REDIS_PORT', '6379')

broker_url = os.environ.get('CELERY_BROKER_URL',
                            f'redis://{REDIS_HOST}:{REDIS_PORT}/1')
result_backend = os.environ.get('CELERY_RESULT_BACKEND', broker_url)

task_serializer = 'json'
accept_content = ['json']
result_serializer = 'json'

task_queues = (Queue('auth'), Queue('user'), Queue('email'))
task_default_queue = 'auth'
task_routes = {
    'addAuthUserToDB': {'queue': 'auth'},
    'addUserToDB': {'queue': 'user'},
    'forgotPasswordEmail': {'queue': 'email'},
}

worker_prefetch_multiplier = 1
task_acks_late = True
