# Portfolio/seed.py
import logging
from typing import Dict

from sqlmodel import Session, func, select

from Auth.models import User
from Auth.security import create_user
from Portfolio.models import Project, Skill
from Portfolio.repository import AboutRepository, LegalRepository, ProjectRepository, SkillRepository

logger = logging.getLogger(__name__)

SAMPLE_ABOUT = {
    "name": "Your Company Name",
    "title": "Full Stack Development & 3D Solutions",
    "bio": "We're a passionate team specializing in creating immersive web experiences "
           "with modern web technologies.",
    "email": "contact@example.com",
    "phone": "+1 (555) 123-4567",
    "location": "San Francisco, CA",
    "github_url": "https://github.com",
    "linkedin_url": "https://linkedin.com",
    "twitter_url": "https://twitter.com",
    "instagram_url": "https://instagram.com",
}

SAMPLE_PROJECTS = [
    {
        "title": "3D Portfolio Website",
        "description": "An immersive 3D portfolio showcasing projects with WebGL and Three.js",
        "technologies": ["React", "Three.js", "TypeScript", "Tailwind CSS", "WebGL"],
        "featured": True,
    },
    {
        "title": "Interactive Data Visualization",
        "description": "Real-time data visualization dashboard with 3D charts and animations",
        "technologies": ["React", "D3.js", "Three.js", "Node.js"],
        "featured": True,
    },
    {
        "title": "E-Commerce Platform",
        "description": "Full-stack e-commerce solution with real-time inventory",
        "technologies": ["Next.js", "PostgreSQL", "Stripe", "Redis", "TypeScript"],
        "featured": False,
    },
]

SAMPLE_SKILLS = [
    ("React", "Frontend", 95),
    ("TypeScript", "Frontend", 90),
    ("Tailwind CSS", "Frontend", 90),
    ("Node.js", "Backend", 85),
    ("PostgreSQL", "Backend", 80),
    ("Three.js", "3D/Graphics", 90),
    ("Blender", "3D/Graphics", 75),
    ("Git", "Tools", 90),
    ("Docker", "Tools", 75),
]


def _empty(db: Session, model) -> bool:
    return db.exec(select(func.count()).select_from(model)).one() == 0


def seed_content(db: Session, username: str = "admin", password: str = "admin123", pepper: str = "") -> Dict[str, int]:
    """Fill an empty database; anything already present is left alone."""
    report = {"admin": 0, "about": 0, "projects": 0, "skills": 0, "legal_docs": 0}

    if not db.exec(select(User).where(User.username == username)).first():
        create_user(db, username, password, pepper)
        report["admin"] = 1
        logger.info("Admin user created username=%s", username)

    about = AboutRepository(db)
    if about.get() is None:
        about.upsert(SAMPLE_ABOUT)
        report["about"] = 1

    if _empty(db, Project):
        projects = ProjectRepository(db)
        for item in SAMPLE_PROJECTS:
            projects.create(item)
        report["projects"] = len(SAMPLE_PROJECTS)

    if _empty(db, Skill):
        skills = SkillRepository(db)
        for name, category, proficiency in SAMPLE_SKILLS:
            skills.create({"name": name, "category": category, "proficiency": proficiency})
        report["skills"] = len(SAMPLE_SKILLS)

    report["legal_docs"] = LegalRepository(db).ensure_defaults()
    return report
