"""WSGI entrypoint: ``gunicorn -c gunicorn.conf.py``."""

from __future__ import annotations

from blogapi import create_app

app = create_app()
