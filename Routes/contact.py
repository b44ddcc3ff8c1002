# Routes/contact.py
import logging
from typing import Annotated, List

from fastapi import APIRouter, Depends, Request, status
from sqlmodel import Session

from Auth.auth import require_admin
from Auth.models import User
from Core.database import get_session
from Core.errors import NotFound, RateLimited
from Core.middleware import client_ip
from Portfolio.repository import MessageRepository
from Portfolio.schemas import ContactMessageCreate, ContactMessageRead, StarredUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/contact", tags=["Contact"])

Admin = Annotated[User, Depends(require_admin)]


def get_messages(db: Annotated[Session, Depends(get_session)]) -> MessageRepository:
    return MessageRepository(db)


Messages = Annotated[MessageRepository, Depends(get_messages)]


def contact_rate_limit(request: Request) -> None:
    limiter = request.app.state.limiters["contact"]
    ip = client_ip(request)
    if not limiter.hit(ip):
        logger.warning("Contact form rate limit exceeded ip=%s", ip)
        raise RateLimited(limiter.message)


@router.post(
    "",
    response_model=ContactMessageRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(contact_rate_limit)],
)
def submit_message(body: ContactMessageCreate, repo: Messages):
    message = repo.create(body.model_dump())
    logger.info("Contact message received id=%s", message.id)
    return message


@router.get("/messages", response_model=List[ContactMessageRead])
def list_messages(repo: Messages, _: Admin):
    return repo.list()


@router.get("/messages/{message_id}", response_model=ContactMessageRead)
def get_message(message_id: str, repo: Messages, _: Admin):
    message = repo.get(message_id)
    if message is None:
        raise NotFound("Message not found")
    return message


@router.put("/messages/{message_id}/read")
def mark_read(message_id: str, repo: Messages, _: Admin):
    if not repo.mark_read(message_id):
        raise NotFound("Message not found")
    return {"message": "Message marked as read"}


@router.put("/messages/{message_id}/starred")
def set_starred(message_id: str, body: StarredUpdate, repo: Messages, _: Admin):
    if not repo.set_starred(message_id, body.starred):
        raise NotFound("Message not found")
    return {"message": "Message starred" if body.starred else "Message unstarred"}


@router.delete("/messages/{message_id}")
def delete_message(message_id: str, repo: Messages, _: Admin):
    if not repo.delete(message_id):
        raise NotFound("Message not found")
    return {"message": "Message deleted successfully"}
