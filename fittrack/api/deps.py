"""
API dependencies.

Provides FastAPI dependencies to verify Firebase ID tokens and to hand
routes the document store and the meal catalog.
"""

from fastapi import Depends, HTTPException
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from firebase_admin import auth

from fittrack.core import firebase
from fittrack.core.store import FirestoreDocumentStore
from fittrack.services.meal_library import MealLibraryError, load_meal_library

security = HTTPBearer(auto_error=True)


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
):
    """
    Verify Firebase ID token from Authorization header.

    Expects:
        Authorization: Bearer <id_token>
    """
    try:
        id_token = credentials.credentials
        decoded = auth.verify_id_token(id_token)
        return decoded
    except Exception as exc:
        raise HTTPException(
            status_code=401,
            detail="Invalid ID token",
        ) from exc


def get_store():
    if firebase.db is None:
        raise HTTPException(status_code=503, detail="Database not initialized")
    return FirestoreDocumentStore(firebase.db)


def get_meal_library():
    try:
        return load_meal_library()
    except MealLibraryError as e:
        raise HTTPException(status_code=502, detail=str(e)) from e
