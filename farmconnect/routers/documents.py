"""
Document locker.

GET  /api/documents/          list, with ?q= search on name or type
POST /api/documents/upload    upload a file (pdf, images, Word)
GET  /api/documents/storage   used vs. quota
Folders live under /api/documents/folders.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from .. import models, schemas
from ..config import settings
from ..data_provider import DataProvider, get_data_provider
from ..database import get_db
from ..seed import seed_documents
from ..storage import UploadRejected, delete_local_file, store_file, validate_upload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])

DOCUMENT_EXTENSIONS = {"pdf", "jpg", "jpeg", "png", "doc", "docx"}


def _get_document(document_id: int, db: Session) -> models.Document:
    doc = db.query(models.Document).filter(models.Document.id == document_id).first()
    if not doc:
        raise HTTPException(status_code=404, detail="Document not found")
    return doc


def _check_folder(folder_id: Optional[int], db: Session):
    if folder_id is None:
        return
    if not db.query(models.DocumentFolder).filter(models.DocumentFolder.id == folder_id).first():
        raise HTTPException(status_code=404, detail="Folder not found")


def _folder_summary(folder: models.DocumentFolder) -> dict:
    dates = [d.uploaded_on for d in folder.documents if d.uploaded_on]
    return {
        "id": folder.id,
        "name": folder.name,
        "document_count": len(folder.documents),
        "last_updated": max(dates) if dates else folder.updated_at,
    }


@router.get("/seed")
def seed(db: Session = Depends(get_db), provider: DataProvider = Depends(get_data_provider)):
    """Seed sample folders and documents. Skips if the locker is not empty."""
    return {"ok": True, "seeded": seed_documents(db, provider)}


@router.get("/", response_model=List[schemas.Document])
def list_documents(
    q: Optional[str] = None,
    folder_id: Optional[int] = None,
    shared: Optional[bool] = None,
    db: Session = Depends(get_db),
):
    query = db.query(models.Document)
    if q:
        pattern = f"%{q.strip()}%"
        query = query.filter(or_(models.Document.name.ilike(pattern), models.Document.doc_type.ilike(pattern)))
    if folder_id is not None:
        query = query.filter(models.Document.folder_id == folder_id)
    if shared is not None:
        query = query.filter(models.Document.shared == shared)
    return query.order_by(models.Document.uploaded_on.desc()).all()


@router.post("/upload", response_model=schemas.Document)
async def upload_document(
    file: UploadFile = File(...),
    doc_type: str = Form("Other"),
    folder_id: Optional[int] = Form(None),
    db: Session = Depends(get_db),
):
    """
    Upload a document into the locker.

    - Validates file type (pdf, jpg, jpeg, png, doc, docx) and size
    - Rejects uploads that would exceed the storage quota
    - Stores to R2 if configured, otherwise local uploads/
    """
    _check_folder(folder_id, db)
    file_bytes = await file.read()
    try:
        ext = validate_upload(file.filename or "", file_bytes, DOCUMENT_EXTENSIONS)
    except UploadRejected as e:
        raise HTTPException(status_code=400, detail=str(e))

    used = db.query(func.coalesce(func.sum(models.Document.size_bytes), 0)).scalar()
    if used + len(file_bytes) > settings.STORAGE_QUOTA_MB * 1024 * 1024:
        raise HTTPException(status_code=400, detail="Storage quota exceeded. Delete documents to free space.")

    file_url = store_file(file_bytes, ext, "documents", prefix="doc")
    doc = models.Document(
        name=file.filename,
        doc_type=doc_type,
        size_bytes=len(file_bytes),
        folder_id=folder_id,
        file_url=file_url,
    )
    db.add(doc)
    db.commit()
    db.refresh(doc)
    logger.info("Document %d uploaded: %s", doc.id, doc.name)
    return doc


@router.get("/storage", response_model=schemas.StorageUsage)
def storage_usage(db: Session = Depends(get_db)):
    used, count = db.query(
        func.coalesce(func.sum(models.Document.size_bytes), 0),
        func.count(models.Document.id),
    ).one()
    quota = settings.STORAGE_QUOTA_MB * 1024 * 1024
    return {
        "used_bytes": used,
        "quota_bytes": quota,
        "used_percentage": round(used / quota * 100, 1) if quota else 0.0,
        "document_count": count,
    }


@router.get("/folders", response_model=List[schemas.Folder])
def list_folders(db: Session = Depends(get_db)):
    folders = db.query(models.DocumentFolder).order_by(models.DocumentFolder.name).all()
    return [_folder_summary(f) for f in folders]


@router.post("/folders", response_model=schemas.Folder)
def create_folder(folder: schemas.FolderCreate, db: Session = Depends(get_db)):
    name = folder.name.strip()
    if not name:
        raise HTTPException(status_code=400, detail="Folder name is required")
    if db.query(models.DocumentFolder).filter(models.DocumentFolder.name == name).first():
        raise HTTPException(status_code=400, detail=f"Folder '{name}' already exists")
    db_folder = models.DocumentFolder(name=name)
    db.add(db_folder)
    db.commit()
    db.refresh(db_folder)
    return _folder_summary(db_folder)


@router.get("/{document_id}", response_model=schemas.Document)
def get_document(document_id: int, db: Session = Depends(get_db)):
    return _get_document(document_id, db)


@router.patch("/{document_id}", response_model=schemas.Document)
def update_document(document_id: int, update: schemas.DocumentUpdate, db: Session = Depends(get_db)):
    doc = _get_document(document_id, db)
    changes = update.model_dump(exclude_unset=True)
    if "folder_id" in changes:
        _check_folder(changes["folder_id"], db)
    for field, value in changes.items():
        # folder_id=null moves the document out of its folder
        if value is None and field != "folder_id":
            continue
        setattr(doc, field, value)
    db.commit()
    db.refresh(doc)
    return doc


@router.delete("/{document_id}")
def delete_document(document_id: int, db: Session = Depends(get_db)):
    doc = _get_document(document_id, db)
    delete_local_file(doc.file_url)
    db.delete(doc)
    db.commit()
    return {"ok": True}
