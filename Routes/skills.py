# Routes/skills.py
from typing import Annotated, List

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from Auth.auth import require_admin
from Auth.models import User
from Core.database import get_session
from Core.errors import NotFound
from Portfolio.reorder import Move
from Portfolio.repository import SkillRepository
from Portfolio.schemas import SkillCreate, SkillRead, SkillReorder, SkillUpdate

router = APIRouter(prefix="/api/skills", tags=["Skills"])

Admin = Annotated[User, Depends(require_admin)]


def get_skills(db: Annotated[Session, Depends(get_session)]) -> SkillRepository:
    return SkillRepository(db)


Skills = Annotated[SkillRepository, Depends(get_skills)]


@router.get("", response_model=List[SkillRead])
def list_skills(repo: Skills):
    return repo.list()


@router.get("/{skill_id}", response_model=SkillRead)
def get_skill(skill_id: str, repo: Skills):
    skill = repo.get(skill_id)
    if skill is None:
        raise NotFound("Skill not found")
    return skill


@router.post("", response_model=SkillRead, status_code=status.HTTP_201_CREATED)
def create_skill(body: SkillCreate, repo: Skills, _: Admin):
    data = body.model_dump(exclude={"custom_category"})
    data["category"] = body.stored_category()
    return repo.create(data)


@router.put("/{skill_id}", response_model=SkillRead)
def update_skill(skill_id: str, body: SkillUpdate, repo: Skills, _: Admin):
    skill = repo.update(skill_id, body.changes())
    if skill is None:
        raise NotFound("Skill not found")
    return skill


@router.delete("/{skill_id}")
def delete_skill(skill_id: str, repo: Skills, _: Admin):
    if not repo.delete(skill_id):
        raise NotFound("Skill not found")
    return {"message": "Skill deleted successfully"}


@router.post("/reorder", summary="Move skills within or across categories")
def reorder_skills(body: SkillReorder, repo: Skills, _: Admin):
    repo.reorder([Move(m.id, m.category, m.order) for m in body.skills])
    return {"message": "Skill order updated"}
