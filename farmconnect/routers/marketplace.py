from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import or_
from sqlalchemy.orm import Session
from typing import List, Optional
from .. import models, schemas
from ..data_provider import DataProvider, get_data_provider
from ..database import get_db
from ..seed import seed_marketplace

router = APIRouter(prefix="/marketplace", tags=["marketplace"])

# Columns that cannot be cleared; null in a PATCH leaves them unchanged
REQUIRED_FIELDS = {"title", "price", "rating"}


def _get_listing(listing_id: int, db: Session) -> models.MarketplaceListing:
    listing = db.query(models.MarketplaceListing).filter(models.MarketplaceListing.id == listing_id).first()
    if not listing:
        raise HTTPException(status_code=404, detail="Listing not found")
    return listing


@router.get("/seed")
def seed_listings(db: Session = Depends(get_db), provider: DataProvider = Depends(get_data_provider)):
    """Seed sample listings. Safe to run multiple times; skips if listings exist."""
    return {"ok": True, "seeded": seed_marketplace(db, provider)}


@router.get("/", response_model=List[schemas.Listing])
def list_listings(
    category: Optional[models.ListingCategory] = None,
    q: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
):
    query = db.query(models.MarketplaceListing)
    if category:
        query = query.filter(models.MarketplaceListing.category == category)
    if q:
        pattern = f"%{q.strip()}%"
        query = query.filter(or_(
            models.MarketplaceListing.title.ilike(pattern),
            models.MarketplaceListing.description.ilike(pattern),
            models.MarketplaceListing.location.ilike(pattern),
            models.MarketplaceListing.sub_category.ilike(pattern),
        ))
    return query.order_by(models.MarketplaceListing.id).offset(skip).limit(limit).all()


@router.post("/", response_model=schemas.Listing)
def create_listing(listing: schemas.ListingCreate, db: Session = Depends(get_db)):
    db_listing = models.MarketplaceListing(**listing.model_dump())
    db.add(db_listing)
    db.commit()
    db.refresh(db_listing)
    return db_listing


@router.get("/{listing_id}", response_model=schemas.Listing)
def get_listing(listing_id: int, db: Session = Depends(get_db)):
    return _get_listing(listing_id, db)


@router.patch("/{listing_id}", response_model=schemas.Listing)
def update_listing(listing_id: int, update: schemas.ListingUpdate, db: Session = Depends(get_db)):
    listing = _get_listing(listing_id, db)
    for field, value in update.model_dump(exclude_unset=True).items():
        if value is None and field in REQUIRED_FIELDS:
            continue
        setattr(listing, field, value)
    db.commit()
    db.refresh(listing)
    return listing


@router.delete("/{listing_id}")
def delete_listing(listing_id: int, db: Session = Depends(get_db)):
    listing = _get_listing(listing_id, db)
    db.delete(listing)
    db.commit()
    return {"ok": True}
