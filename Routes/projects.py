# Routes/projects.py
from typing import Annotated, List

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from Auth.auth import require_admin
from Auth.models import User
from Core.database import get_session
from Core.errors import NotFound
from Portfolio.reorder import Move
from Portfolio.repository import ProjectRepository
from Portfolio.schemas import ProjectCreate, ProjectRead, ProjectReorder, ProjectUpdate

router = APIRouter(prefix="/api/projects", tags=["Projects"])

Admin = Annotated[User, Depends(require_admin)]


def get_projects(db: Annotated[Session, Depends(get_session)]) -> ProjectRepository:
    return ProjectRepository(db)


Projects = Annotated[ProjectRepository, Depends(get_projects)]


@router.get("", response_model=List[ProjectRead])
def list_projects(repo: Projects):
    return repo.list()


@router.get("/{project_id}", response_model=ProjectRead)
def get_project(project_id: str, repo: Projects):
    project = repo.get(project_id)
    if project is None:
        raise NotFound("Project not found")
    return project


@router.post("/reorder")
def reorder_projects(body: ProjectReorder, repo: Projects, _: Admin):
    repo.reorder([Move(m.id, repo.single_group, m.order) for m in body.projects])
    return {"message": "Project order updated"}


@router.post("", response_model=ProjectRead, status_code=status.HTTP_201_CREATED)
def create_project(body: ProjectCreate, repo: Projects, _: Admin):
    return repo.create(body.model_dump())


@router.put("/{project_id}", response_model=ProjectRead)
def update_project(project_id: str, body: ProjectUpdate, repo: Projects, _: Admin):
    project = repo.update(project_id, body.changes())
    if project is None:
        raise NotFound("Project not found")
    return project


@router.delete("/{project_id}")
def delete_project(project_id: str, repo: Projects, _: Admin):
    if not repo.delete(project_id):
        raise NotFound("Project not found")
    return {"message": "Project deleted successfully"}
