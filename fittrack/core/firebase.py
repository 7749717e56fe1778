"""
Firebase admin initialization.

The mobile app authenticates users with Firebase Authentication and sends
the resulting ID tokens to this service. The backend verifies those tokens
with the Firebase Admin SDK and reads/writes Firestore on the user's behalf.
"""

import os
import firebase_admin
from firebase_admin import credentials, firestore

from fittrack.core.config import settings
from fittrack.services.logger import logger

# Global references to avoid re-initialization
_firebase_app = None
db = None


def init_firebase():
    """
    Initialize Firebase Admin SDK if not already initialized.

    The credentials path comes from FIREBASE_CREDENTIALS (env or .env),
    defaulting to fittrack/core/firebase_key.json for local development.
    """

    global _firebase_app, db

    # Prevent re-initialization (important for Uvicorn reload)
    if firebase_admin._apps:
        if db is None:
            db = firestore.client()
        return

    cred_path = settings.FIREBASE_CREDENTIALS

    if not os.path.exists(cred_path):
        raise RuntimeError(
            f"Firebase credentials not found at: {cred_path}\n"
            "Set FIREBASE_CREDENTIALS env var or place firebase_key.json correctly."
        )

    cred = credentials.Certificate(cred_path)
    _firebase_app = firebase_admin.initialize_app(cred)

    db = firestore.client()

    logger.info("Firebase Admin initialized successfully.")
