"""Application factories for the auth service and its worker."""

from celery import Celery
from flask import Flask

from . import tasks  # noqa: F401  registers the tasks with Celery.
from .routes import auth
from .services import database, uploads, user_cache

celery_app = Celery('chatty', include=['chatty.tasks'])
celery_app.config_from_object('chatty.celeryconfig')


def create_web_app() -> Flask:
    """Initialize and configure the auth application."""
    app = Flask('chatty')
    app.config.from_pyfile('config.py')

    database.init_app(app)
    user_cache.init_app(app)
    uploads.init_app(app)

    app.register_blueprint(auth.blueprint)

    celery_app.conf.broker_url = app.config['CELERY_BROKER_URL']
    celery_app.conf.result_backend = app.config['CELERY_RESULT_BACKEND']
    celery_app.conf.task_always_eager = app.config['CELERY_ALWAYS_EAGER']

    if app.config['CREATE_DB']:
        with app.app_context():
            database.create_all()

    return app


def create_worker_app() -> Flask:
    """
    Initialize the app that the worker runs in.

    Tasks write to the authoritative store, so they need the same database
    session as the web app; nothing else is wired up here.
    """
    app = Flask('chatty')
    app.config.from_pyfile('config.py')
    database.init_app(app)

    celery_app.conf.broker_url = app.config['CELERY_BROKER_URL']
    celery_app.conf.result_backend = app.config['CELERY_RESULT_BACKEND']

    if app.config['CREATE_DB']:
        with app.app_context():
            database.create_all()
    return app
