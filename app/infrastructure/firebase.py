"""Firebase Admin SDK bootstrap."""

from __future__ import annotations

import logging

import firebase_admin
from firebase_admin import credentials

from app.config import Settings

logger = logging.getLogger(__name__)

FIREBASE_APP_NAME = "push-relay"


def initialize_firebase_app(settings: Settings) -> firebase_admin.App:
    """Return the relay's Firebase app, initializing it on first use."""

    try:
        return firebase_admin.get_app(FIREBASE_APP_NAME)
    except ValueError:
        pass

    credential = credentials.Certificate(settings.service_account_info())
    options = {}
    if settings.firebase_database_url:
        options["databaseURL"] = settings.firebase_database_url

    app = firebase_admin.initialize_app(credential, options, name=FIREBASE_APP_NAME)
    logger.info("Firebase app initialized for project %s", app.project_id)
    return app


__all__ = ["FIREBASE_APP_NAME", "initialize_firebase_app"]
