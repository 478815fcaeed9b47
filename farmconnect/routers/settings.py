from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from .. import schemas
from ..database import get_db
from ..seed import ensure_settings

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("", response_model=schemas.UserSettings)
def get_settings(db: Session = Depends(get_db)):
    return ensure_settings(db)


@router.patch("", response_model=schemas.UserSettings)
def update_settings(update: schemas.SettingsUpdate, db: Session = Depends(get_db)):
    prefs = ensure_settings(db)
    for field, value in update.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(prefs, field, value)
    db.commit()
    db.refresh(prefs)
    return prefs
