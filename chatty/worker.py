"""Initialize the Celery application."""

from chatty.factory import create_worker_app, celery_app  # noqa: F401

app = create_worker_app()
app.app_context().push()
