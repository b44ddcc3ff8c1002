# Portfolio/models.py
from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Field, SQLModel

from Auth.models import new_id

ABOUT_ID = "main"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Project(SQLModel, table=True):
    __tablename__ = "projects"

    id: str = Field(default_factory=new_id, primary_key=True)
    title: str
    description: str
    image_url: Optional[str] = None
    github_url: Optional[str] = None
    live_url: Optional[str] = None
    technologies: str  # JSON text, decoded by ProjectRepository
    featured: bool = Field(default=False)
    order: int = Field(default=0, index=True)
    created_at: datetime = Field(default_factory=utcnow)


class Skill(SQLModel, table=True):
    __tablename__ = "skills"

    id: str = Field(default_factory=new_id, primary_key=True)
    name: str
    category: str = Field(index=True)
    proficiency: int
    icon: Optional[str] = None
    order: int = Field(default=0)


class Testimonial(SQLModel, table=True):
    __tablename__ = "testimonials"

    id: str = Field(default_factory=new_id, primary_key=True)
    name: str
    role: Optional[str] = None
    company: Optional[str] = None
    content: str
    rating: int = Field(default=5)
    avatar_url: Optional[str] = None
    is_visible: bool = Field(default=False, index=True)
    order: int = Field(default=0)
    created_at: datetime = Field(default_factory=utcnow)


class ContactMessage(SQLModel, table=True):
    __tablename__ = "contact_messages"

    id: str = Field(default_factory=new_id, primary_key=True)
    name: str
    email: str
    subject: str
    project_type: str
    message: str
    read: bool = Field(default=False)
    starred: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utcnow)


class AboutInfo(SQLModel, table=True):
    __tablename__ = "about_info"

    id: str = Field(default=ABOUT_ID, primary_key=True)
    name: str
    title: str
    bio: str
    avatar_url: Optional[str] = None
    resume_url: Optional[str] = None
    github_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    twitter_url: Optional[str] = None
    instagram_url: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    available_for_work: bool = Field(default=True)
    response_time: Optional[str] = "24 hours"
    working_hours: Optional[str] = "9 AM - 6 PM EST"
    completed_projects: int = Field(default=0)
    total_clients: int = Field(default=0)
    years_experience: int = Field(default=0)
    technologies_count: int = Field(default=0)
    updated_at: datetime = Field(default_factory=utcnow)


class LegalDoc(SQLModel, table=True):
    __tablename__ = "legal_docs"

    id: str = Field(primary_key=True)  # privacy_policy | terms_of_service
    content: str
    updated_at: datetime = Field(default_factory=utcnow)
