"""ASGI entry point: ``uvicorn main:app``."""

from spam_email_classifier.api import create_app

app = create_app()
