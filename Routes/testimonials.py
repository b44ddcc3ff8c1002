# Routes/testimonials.py
from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from Auth.auth import require_admin
from Auth.models import User
from Core.database import get_session
from Core.errors import CapacityExceeded, NotFound
from Portfolio.reorder import Move
from Portfolio.repository import TestimonialRepository
from Portfolio.schemas import (
    MAX_VISIBLE_TESTIMONIALS,
    TestimonialCreate,
    TestimonialRead,
    TestimonialReorder,
    TestimonialUpdate,
)

router = APIRouter(prefix="/api/testimonials", tags=["Testimonials"])

Admin = Annotated[User, Depends(require_admin)]
CAPACITY_MESSAGE = f"Only {MAX_VISIBLE_TESTIMONIALS} testimonials can be visible at the same time"


def get_testimonials(db: Annotated[Session, Depends(get_session)]) -> TestimonialRepository:
    return TestimonialRepository(db)


Testimonials = Annotated[TestimonialRepository, Depends(get_testimonials)]


def ensure_visible_slot(repo: TestimonialRepository) -> None:
    if repo.count_visible() >= MAX_VISIBLE_TESTIMONIALS:
        raise CapacityExceeded(CAPACITY_MESSAGE)


@router.get("", response_model=List[TestimonialRead])
def list_testimonials(repo: Testimonials, visible: Optional[bool] = Query(default=None)):
    if visible:
        return repo.list_visible()
    return repo.list()


@router.post("", response_model=TestimonialRead, status_code=status.HTTP_201_CREATED)
def create_testimonial(body: TestimonialCreate, repo: Testimonials, _: Admin):
    if body.is_visible:
        ensure_visible_slot(repo)
    return repo.create(body.model_dump())


@router.put("/{testimonial_id}", response_model=TestimonialRead)
def update_testimonial(testimonial_id: str, body: TestimonialUpdate, repo: Testimonials, _: Admin):
    current = repo.get(testimonial_id)
    if current is None:
        raise NotFound("Testimonial not found")
    if body.is_visible and not current.is_visible:
        ensure_visible_slot(repo)
    return repo.update(testimonial_id, body.changes())


@router.delete("/{testimonial_id}")
def delete_testimonial(testimonial_id: str, repo: Testimonials, _: Admin):
    if not repo.delete(testimonial_id):
        raise NotFound("Testimonial not found")
    return {"message": "Testimonial deleted successfully"}


@router.post("/reorder", summary="Reorder testimonials within their visibility group")
def reorder_testimonials(body: TestimonialReorder, repo: Testimonials, _: Admin):
    moves = []
    for m in body.testimonials:
        row = repo.row(m.id)
        if row is None:
            raise NotFound("Testimonial not found")
        moves.append(Move(m.id, repo.group_of(row), m.order))
    repo.reorder(moves)
    return {"message": "Testimonial order updated"}
