"""Seed endpoint for development databases."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.config import get_settings
from app.database import get_db
from app.services.seed import get_seed_service

router = APIRouter(prefix="/api/v1/seed", tags=["Seed"])


@router.get("/")
def run_seed(db: Session = Depends(get_db)) -> dict:
    """Replace all users with the demo set."""
    if not get_settings().seed_enabled:
        raise HTTPException(status_code=403, detail="Seeding is disabled in production")
    get_seed_service().run(db)
    return {"detail": "SEED EXECUTED"}
