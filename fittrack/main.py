import logging

from fastapi import FastAPI

from fittrack.api.routes.router import api_router
from fittrack.core.config import settings
from fittrack.core.firebase import init_firebase

logging.basicConfig(level=logging.DEBUG if settings.DEBUG_MODE else logging.INFO)

app = FastAPI(title="FitTrack Nutrition Backend")


@app.on_event("startup")
def startup():
    """Initialize Firebase Admin (reads credentials path from settings)."""
    init_firebase()


@app.get("/")
async def root():
    return {"message": "FitTrack Nutrition Backend is running"}


@app.get("/health")
async def health_check():
    return {"status": "ok"}


# Include API routers
app.include_router(api_router)
