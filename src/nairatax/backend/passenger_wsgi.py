"""WSGI entrypoint for deploying the NairaTax backend behind Passenger or gunicorn."""

import logging
import os

from nairatax.backend.app import create_app

logging.basicConfig(level=os.getenv("NAIRATAX_LOG_LEVEL", "INFO").upper())

# Passenger expects a module-level variable named ``application``.
application = create_app()
