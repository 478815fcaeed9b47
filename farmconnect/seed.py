"""
Seed the CRUD tables from the sample datasets.

Every seeder skips tables that already have rows, so running it on each
startup is safe.
"""

import logging
from datetime import datetime

from sqlalchemy.orm import Session

from . import models
from .data_provider import DataProvider

logger = logging.getLogger(__name__)


def _parse_date(value):
    if not value:
        return None
    return datetime.strptime(value, "%Y-%m-%d")


def seed_marketplace(db: Session, provider: DataProvider) -> int:
    if db.query(models.MarketplaceListing).count():
        return 0
    listings = provider.fetch("marketplace_listings")
    for data in listings:
        db.add(models.MarketplaceListing(**data))
    db.commit()
    return len(listings)


def seed_documents(db: Session, provider: DataProvider) -> int:
    if db.query(models.DocumentFolder).count() or db.query(models.Document).count():
        return 0
    folders = {}
    for data in provider.fetch("document_folders"):
        folder = models.DocumentFolder(name=data["name"])
        db.add(folder)
        folders[folder.name] = folder
    db.flush()

    documents = provider.fetch("documents")
    for data in documents:
        folder = folders.get(data.pop("folder", None))
        uploaded_on = _parse_date(data.pop("uploaded_on", None))
        doc = models.Document(folder_id=folder.id if folder else None, **data)
        if uploaded_on:
            doc.uploaded_on = uploaded_on
        db.add(doc)
    db.commit()
    return len(documents)


def ensure_profile(db: Session, provider: DataProvider) -> models.FarmerProfile:
    profile = db.query(models.FarmerProfile).first()
    if profile:
        return profile
    data = provider.fetch("farmer_profile")
    member_since = _parse_date(data.pop("member_since", None))
    profile = models.FarmerProfile(**data)
    if member_since:
        profile.member_since = member_since
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile


def ensure_settings(db: Session) -> models.UserSettings:
    prefs = db.query(models.UserSettings).first()
    if prefs:
        return prefs
    prefs = models.UserSettings()
    db.add(prefs)
    db.commit()
    db.refresh(prefs)
    return prefs


def seed_all(db: Session, provider: DataProvider) -> dict:
    seeded = {
        "marketplace_listings": seed_marketplace(db, provider),
        "documents": seed_documents(db, provider),
    }
    ensure_profile(db, provider)
    ensure_settings(db)
    logger.info("Seed complete: %s", seeded)
    return seeded
