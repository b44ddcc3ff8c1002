# Routes/about.py
from typing import Annotated, Optional

from fastapi import APIRouter, Depends
from sqlmodel import Session

from Auth.auth import require_admin
from Auth.models import User
from Core.database import get_session
from Core.errors import NotFound
from Portfolio.repository import AboutRepository, LegalRepository
from Portfolio.schemas import AboutInfoRead, AboutInfoUpdate, LegalDocRead, LegalDocUpdate

router = APIRouter(prefix="/api", tags=["About"])

Admin = Annotated[User, Depends(require_admin)]
DB = Annotated[Session, Depends(get_session)]


@router.get("/about", response_model=Optional[AboutInfoRead])
def get_about(db: DB):
    """The about row, or null when it was never written."""
    return AboutRepository(db).get()


@router.put("/about", response_model=AboutInfoRead)
def put_about(body: AboutInfoUpdate, db: DB, _: Admin):
    return AboutRepository(db).upsert(body.model_dump())


@router.get("/legal/{doc_type}", response_model=LegalDocRead)
def get_legal(doc_type: str, db: DB):
    doc = LegalRepository(db).get(doc_type)
    if doc is None:
        raise NotFound("Document not found")
    return doc


@router.put("/legal/{doc_type}", response_model=LegalDocRead)
def put_legal(doc_type: str, body: LegalDocUpdate, db: DB, _: Admin):
    doc = LegalRepository(db).put(doc_type, body.content)
    if doc is None:
        raise NotFound("Document not found")
    return doc
