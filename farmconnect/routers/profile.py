from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from .. import schemas
from ..data_provider import DataProvider, get_data_provider
from ..database import get_db
from ..seed import ensure_profile

router = APIRouter(prefix="/profile", tags=["profile"])

REQUIRED_FIELDS = {"name", "crops"}


@router.get("", response_model=schemas.Profile)
def get_profile(db: Session = Depends(get_db), provider: DataProvider = Depends(get_data_provider)):
    return ensure_profile(db, provider)


@router.patch("", response_model=schemas.Profile)
def update_profile(update: schemas.ProfileUpdate, db: Session = Depends(get_db),
                   provider: DataProvider = Depends(get_data_provider)):
    profile = ensure_profile(db, provider)
    for field, value in update.model_dump(exclude_unset=True).items():
        if value is None and field in REQUIRED_FIELDS:
            continue
        if field == "crops":
            value = [c.strip() for c in value if c.strip()]
        setattr(profile, field, value)
    db.commit()
    db.refresh(profile)
    return profile
