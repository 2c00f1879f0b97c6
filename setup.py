"""Install the chatty auth service."""

from setuptools import setup, find_packages

setup(
    name='chatty-auth',
    version='0.1',
    packages=find_packages(exclude=['*test*']),
    package_data={'chatty': ['templates/emails/*.html']},
    install_requires=[
        "flask",
        "flask-sqlalchemy",
        "sqlalchemy",
        "celery",
        "kombu",
        "redis",
        "fakeredis",
        "pyjwt",
        "wtforms",
        "email_validator",
        "requests",
        "retry",
        "python-dateutil",
        "pytz",
        "werkzeug"
    ],
    extras_require={
        'test': ['pytest']
    },
    zip_safe=False
)
