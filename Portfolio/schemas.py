# Portfolio/schemas.py
# Request and response shapes. Clients speak camelCase JSON (imageUrl,
# isVisible); attributes stay snake_case through the alias generator.
# Ranged numbers (proficiency, rating, order) are strict integers: 4.5 and
# "4" are rejected rather than coerced.

import re
from datetime import datetime
from typing import Annotated, ClassVar, List, Literal, Optional, Tuple

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    HttpUrl,
    TypeAdapter,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

SKILL_CATEGORIES = ("Frontend", "Backend", "3D/Graphics", "Tools", "Other")
MAX_VISIBLE_TESTIMONIALS = 20
LEGAL_DOC_TYPES = ("privacy_policy", "terms_of_service")

Position = Annotated[int, Field(strict=True, ge=0)]
Proficiency = Annotated[int, Field(strict=True, ge=1, le=100)]
Rating = Annotated[int, Field(strict=True, ge=1, le=5)]
Counter = Annotated[int, Field(strict=True, ge=0)]

_NAME_RE = re.compile(r"[a-zA-Z ]+")
_HTTP_URL = TypeAdapter(HttpUrl)


class ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def _blank_to_none(value):
    if isinstance(value, str) and value.strip() == "":
        return None
    return value


def _check_http_url(value: Optional[str]) -> Optional[str]:
    """Validate as an http(s) URL but keep the string exactly as sent."""
    if value is None:
        return value
    try:
        _HTTP_URL.validate_python(value)
    except ValidationError:
        raise ValueError("Invalid url")
    return value


def _check_loose_url(value: Optional[str]) -> Optional[str]:
    """Accept "github.com/me" as well as full URLs."""
    if value is None:
        return value
    candidate = value if value.startswith(("http://", "https://")) else f"https://{value}"
    try:
        _HTTP_URL.validate_python(candidate)
    except ValidationError:
        raise ValueError("Invalid URL format")
    return value


class PartialUpdate(ApiModel):
    """Base for PUT bodies: omitted fields stay untouched, but a column that
    cannot be empty may not be explicitly set to null either."""

    required: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="after")
    def _no_null_required(self):
        for name in self.required:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


# ─── PROJECTS ───────────────────────────────────────────────────────────────
class ProjectFields(ApiModel):
    @field_validator("image_url", "github_url", "live_url", mode="before", check_fields=False)
    @classmethod
    def _blank(cls, v):
        return _blank_to_none(v)

    @field_validator("github_url", "live_url", check_fields=False)
    @classmethod
    def _url(cls, v):
        return _check_http_url(v)

    @field_validator("technologies", check_fields=False)
    @classmethod
    def _technologies(cls, v):
        if v is not None and len(v) < 1:
            raise ValueError("At least one technology is required")
        return v


class ProjectCreate(ProjectFields):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1)
    image_url: Optional[str] = None
    github_url: Optional[str] = None
    live_url: Optional[str] = None
    technologies: List[str]
    featured: bool = False
    order: Optional[Position] = None


class ProjectUpdate(ProjectFields, PartialUpdate):
    required: ClassVar[Tuple[str, ...]] = ("title", "description", "technologies", "featured", "order")

    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, min_length=1)
    image_url: Optional[str] = None
    github_url: Optional[str] = None
    live_url: Optional[str] = None
    technologies: Optional[List[str]] = None
    featured: Optional[bool] = None
    order: Optional[Position] = None


class ProjectRead(ApiModel):
    id: str
    title: str
    description: str
    image_url: Optional[str] = None
    github_url: Optional[str] = None
    live_url: Optional[str] = None
    technologies: List[str]
    featured: bool
    order: int
    created_at: datetime


# ─── SKILLS ─────────────────────────────────────────────────────────────────
class SkillCreate(ApiModel):
    name: str = Field(min_length=1, max_length=100)
    category: Literal[SKILL_CATEGORIES]
    custom_category: Optional[str] = Field(default=None, max_length=50)
    proficiency: Proficiency
    icon: Optional[str] = None
    order: Optional[Position] = None

    @field_validator("custom_category", "icon", mode="before")
    @classmethod
    def _blank(cls, v):
        return _blank_to_none(v)

    def stored_category(self) -> str:
        if self.category == "Other" and self.custom_category:
            return self.custom_category.strip()
        return self.category


class SkillUpdate(PartialUpdate):
    required: ClassVar[Tuple[str, ...]] = ("name", "category", "proficiency", "order")

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    category: Optional[Literal[SKILL_CATEGORIES]] = None
    custom_category: Optional[str] = Field(default=None, max_length=50)
    proficiency: Optional[Proficiency] = None
    icon: Optional[str] = None
    order: Optional[Position] = None

    @field_validator("custom_category", "icon", mode="before")
    @classmethod
    def _blank(cls, v):
        return _blank_to_none(v)

    @model_validator(mode="after")
    def _custom_needs_other(self):
        if self.custom_category and self.category != "Other":
            raise ValueError('customCategory requires category "Other"')
        return self

    def changes(self) -> dict:
        data = super().changes()
        custom = data.pop("custom_category", None)
        if data.get("category") == "Other" and custom:
            data["category"] = custom.strip()
        return data


class SkillRead(ApiModel):
    id: str
    name: str
    category: str
    proficiency: int
    icon: Optional[str] = None
    order: int


class SkillMove(ApiModel):
    id: str
    category: str = Field(min_length=1)
    order: Position


class SkillReorder(ApiModel):
    skills: List[SkillMove] = Field(min_length=1)


class OrderMove(ApiModel):
    id: str
    order: Position


class ProjectReorder(ApiModel):
    projects: List[OrderMove] = Field(min_length=1)


class TestimonialReorder(ApiModel):
    testimonials: List[OrderMove] = Field(min_length=1)


# ─── TESTIMONIALS ───────────────────────────────────────────────────────────
class TestimonialCreate(ApiModel):
    name: str = Field(min_length=2, max_length=100)
    role: Optional[str] = Field(default=None, max_length=100)
    company: Optional[str] = Field(default=None, max_length=100)
    content: str = Field(min_length=10, max_length=1000)
    rating: Rating = 5
    avatar_url: Optional[str] = None
    is_visible: bool = False
    order: Optional[Position] = None

    @field_validator("role", "company", "avatar_url", mode="before")
    @classmethod
    def _blank(cls, v):
        return _blank_to_none(v)


class TestimonialUpdate(PartialUpdate):
    required: ClassVar[Tuple[str, ...]] = ("name", "content", "rating", "is_visible", "order")

    name: Optional[str] = Field(default=None, min_length=2, max_length=100)
    role: Optional[str] = Field(default=None, max_length=100)
    company: Optional[str] = Field(default=None, max_length=100)
    content: Optional[str] = Field(default=None, min_length=10, max_length=1000)
    rating: Optional[Rating] = None
    avatar_url: Optional[str] = None
    is_visible: Optional[bool] = None
    order: Optional[Position] = None

    @field_validator("role", "company", "avatar_url", mode="before")
    @classmethod
    def _blank(cls, v):
        return _blank_to_none(v)


class TestimonialRead(ApiModel):
    id: str
    name: str
    role: Optional[str] = None
    company: Optional[str] = None
    content: str
    rating: int
    avatar_url: Optional[str] = None
    is_visible: bool
    order: int
    created_at: datetime


# ─── CONTACT ────────────────────────────────────────────────────────────────
class ContactMessageCreate(ApiModel):
    name: str
    email: EmailStr
    subject: str
    project_type: str
    message: str

    @field_validator("name")
    @classmethod
    def _name(cls, v: str) -> str:
        if len(v) < 2:
            raise ValueError("Name must be at least 2 characters")
        if len(v) > 100:
            raise ValueError("Name must be less than 100 characters")
        if not _NAME_RE.fullmatch(v):
            raise ValueError("Name can only contain letters and spaces")
        return v

    @field_validator("subject")
    @classmethod
    def _subject(cls, v: str) -> str:
        if len(v) < 1:
            raise ValueError("Subject is required")
        if len(v) > 200:
            raise ValueError("Subject must be less than 200 characters")
        return v

    @field_validator("project_type")
    @classmethod
    def _project_type(cls, v: str) -> str:
        if len(v) < 1:
            raise ValueError("Project type is required")
        return v

    @field_validator("message")
    @classmethod
    def _message(cls, v: str) -> str:
        if len(v) < 10:
            raise ValueError("Message must be at least 10 characters")
        if len(v) > 1000:
            raise ValueError("Message must be less than 1000 characters")
        return v


class ContactMessageRead(ApiModel):
    id: str
    name: str
    email: str
    subject: str
    project_type: str
    message: str
    read: bool
    starred: bool
    created_at: datetime


class StarredUpdate(ApiModel):
    starred: bool


# ─── ABOUT ──────────────────────────────────────────────────────────────────
_ABOUT_URLS = ("avatar_url", "resume_url", "github_url", "linkedin_url", "twitter_url", "instagram_url")


class AboutInfoUpdate(ApiModel):
    name: str = Field(min_length=1)
    title: str = Field(min_length=1)
    bio: str = Field(min_length=1)
    avatar_url: Optional[str] = None
    resume_url: Optional[str] = None
    github_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    twitter_url: Optional[str] = None
    instagram_url: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    available_for_work: bool = True
    response_time: Optional[str] = "24 hours"
    working_hours: Optional[str] = "9 AM - 6 PM EST"
    completed_projects: Counter = 0
    total_clients: Counter = 0
    years_experience: Counter = 0
    technologies_count: Counter = 0

    @field_validator(*_ABOUT_URLS, "email", "phone", "location", mode="before")
    @classmethod
    def _blank(cls, v):
        return _blank_to_none(v)

    @field_validator(*_ABOUT_URLS)
    @classmethod
    def _url(cls, v):
        return _check_loose_url(v)


class AboutInfoRead(ApiModel):
    id: str
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
    available_for_work: bool
    response_time: Optional[str] = None
    working_hours: Optional[str] = None
    completed_projects: int
    total_clients: int
    years_experience: int
    technologies_count: int
    updated_at: datetime


# ─── LEGAL & AUTH ───────────────────────────────────────────────────────────
class LegalDocUpdate(ApiModel):
    content: str = Field(min_length=1)


class LegalDocRead(ApiModel):
    id: str
    content: str
    updated_at: datetime


class LoginRequest(ApiModel):
    username: str
    password: str
