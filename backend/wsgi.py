"""WSGI entrypoint: ``gunicorn -c gunicorn.conf.py wsgi:app`` from ``backend/``."""

from authcore import create_app

app = create_app()
