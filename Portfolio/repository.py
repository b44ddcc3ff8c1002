# Portfolio/repository.py
import json
import logging
from typing import Generic, List, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel
from sqlmodel import Session, SQLModel, func, select

from Portfolio.models import (
    ABOUT_ID,
    AboutInfo,
    ContactMessage,
    LegalDoc,
    Project,
    Skill,
    Testimonial,
    utcnow,
)
from Portfolio.reorder import Item, Move, Placement, densify, resequence
from Portfolio.schemas import (
    AboutInfoRead,
    ContactMessageRead,
    LEGAL_DOC_TYPES,
    LegalDocRead,
    ProjectRead,
    SkillRead,
    TestimonialRead,
)

logger = logging.getLogger(__name__)

Row = TypeVar("Row", bound=SQLModel)
Read = TypeVar("Read", bound=BaseModel)

DEFAULT_LEGAL_TEXT = {
    "privacy_policy": "Your default privacy policy content goes here.",
    "terms_of_service": "Your default terms of service content goes here.",
}


# ── technologies: list in the API, JSON text in the table ──────────────────
def encode_technologies(technologies: Sequence[str]) -> str:
    return json.dumps(list(technologies))


def decode_technologies(raw: str) -> List[str]:
    return list(json.loads(raw)) if raw else []


class TableRepository(Generic[Row, Read]):
    """create / get / list / update / delete for one table.

    Callers get public read models back, never table rows, so storage-only
    representations stay inside this module.
    """

    model: Type[Row]
    read_model: Type[Read]

    def __init__(self, db: Session):
        self.db = db

    # hooks
    def to_public(self, row: Row) -> Read:
        return self.read_model.model_validate(row.model_dump())

    def to_columns(self, data: dict) -> dict:
        return data

    def list_query(self):
        return select(self.model)

    # operations
    def row(self, item_id: str) -> Optional[Row]:
        return self.db.get(self.model, item_id)

    def get(self, item_id: str) -> Optional[Read]:
        row = self.row(item_id)
        return self.to_public(row) if row else None

    def list(self) -> List[Read]:
        return [self.to_public(r) for r in self.db.exec(self.list_query()).all()]

    def create(self, data: dict) -> Read:
        row = self.model(**self.to_columns(data))
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return self.to_public(row)

    def update(self, item_id: str, changes: dict) -> Optional[Read]:
        row = self.row(item_id)
        if row is None:
            return None
        for key, value in self.to_columns(changes).items():
            setattr(row, key, value)
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return self.to_public(row)

    def delete(self, item_id: str) -> bool:
        row = self.row(item_id)
        if row is None:
            return False
        self.db.delete(row)
        self.db.commit()
        return True


class OrderedRepository(TableRepository[Row, Read]):
    """Tables whose rows carry a dense ``order`` within a group.

    Create, update, delete and reorder keep every touched group numbered
    0..n-1; each call is one transaction.
    """

    group_column: Optional[str] = None
    single_group = "all"
    APPEND = 1_000_000_000  # parks a new row after everything before it is placed

    def group_of(self, row: Row) -> str:
        if self.group_column is None:
            return self.single_group
        return getattr(row, self.group_column)

    def set_group(self, row: Row, group: str) -> None:
        if self.group_column is not None:
            setattr(row, self.group_column, group)

    def ordered_rows(self) -> List[Row]:
        return list(self.db.exec(select(self.model).order_by(self.model.order)).all())

    def _items(self, rows: Sequence[Row]) -> List[Item]:
        return [Item(r.id, self.group_of(r), r.order) for r in rows]

    def _write(self, rows: Sequence[Row], placements: Sequence[Placement]) -> None:
        by_id = {r.id: r for r in rows}
        for p in placements:
            row = by_id[p.id]
            if self.group_of(row) != p.group:
                self.set_group(row, p.group)
            row.order = p.order
            self.db.add(row)

    def _commit(self) -> None:
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def create(self, data: dict) -> Read:
        data = dict(data)
        position = data.pop("order", None)
        row = self.model(**self.to_columns(data))
        row.order = self.APPEND
        self.db.add(row)
        self.db.flush()

        rows = self.ordered_rows()
        placements = resequence(self._items(rows), [Move(row.id, self.group_of(row), position)])
        self._write(rows, placements)
        self._commit()
        self.db.refresh(row)
        return self.to_public(row)

    def update(self, item_id: str, changes: dict) -> Optional[Read]:
        row = self.row(item_id)
        if row is None:
            return None

        changes = self.to_columns(dict(changes))
        position = changes.pop("order", None)
        new_group = None
        if self.group_column is not None and self.group_column in changes:
            new_group = changes.pop(self.group_column)
        for key, value in changes.items():
            setattr(row, key, value)
        self.db.add(row)

        moved_group = new_group is not None and new_group != self.group_of(row)
        if moved_group or position is not None:
            target = new_group if new_group is not None else self.group_of(row)
            rows = self.ordered_rows()
            placements = resequence(self._items(rows), [Move(row.id, target, position)])
            self._write(rows, placements)
        self._commit()
        self.db.refresh(row)
        return self.to_public(row)

    def delete(self, item_id: str) -> bool:
        row = self.row(item_id)
        if row is None:
            return False
        group = self.group_of(row)
        self.db.delete(row)
        self.db.flush()

        rows = self.ordered_rows()
        self._write(rows, densify(self._items(rows), [group]))
        self._commit()
        return True

    def reorder(self, moves: Sequence[Move]) -> List[Placement]:
        rows = self.ordered_rows()
        placements = resequence(self._items(rows), moves)
        self._write(rows, placements)
        self._commit()
        logger.info("Resequenced %d %s rows", len(placements), self.model.__tablename__)
        return placements


class ProjectRepository(OrderedRepository[Project, ProjectRead]):
    model = Project
    read_model = ProjectRead

    def to_columns(self, data: dict) -> dict:
        if data.get("technologies") is not None:
            data = dict(data, technologies=encode_technologies(data["technologies"]))
        return data

    def to_public(self, row: Project) -> ProjectRead:
        values = row.model_dump()
        values["technologies"] = decode_technologies(row.technologies)
        return ProjectRead.model_validate(values)

    def list_query(self):
        return select(Project).order_by(Project.order, Project.created_at)


class SkillRepository(OrderedRepository[Skill, SkillRead]):
    model = Skill
    read_model = SkillRead
    group_column = "category"

    def list_query(self):
        return select(Skill).order_by(Skill.category, Skill.order)


class TestimonialRepository(OrderedRepository[Testimonial, TestimonialRead]):
    """Visible and hidden testimonials are numbered separately so the
    public list is always dense."""

    model = Testimonial
    read_model = TestimonialRead
    group_column = "is_visible"

    def group_of(self, row: Testimonial) -> str:
        return "visible" if row.is_visible else "hidden"

    def set_group(self, row: Testimonial, group: str) -> None:
        row.is_visible = group == "visible"

    def update(self, item_id: str, changes: dict) -> Optional[TestimonialRead]:
        changes = dict(changes)
        if changes.get("is_visible") is not None:
            changes["is_visible"] = "visible" if changes["is_visible"] else "hidden"
        return super().update(item_id, changes)

    def list_query(self):
        return select(Testimonial).order_by(Testimonial.is_visible.desc(), Testimonial.order)

    def list_visible(self) -> List[TestimonialRead]:
        query = select(Testimonial).where(Testimonial.is_visible == True).order_by(Testimonial.order)  # noqa: E712
        return [self.to_public(r) for r in self.db.exec(query).all()]

    def count_visible(self) -> int:
        query = select(func.count()).select_from(Testimonial).where(Testimonial.is_visible == True)  # noqa: E712
        return self.db.exec(query).one()


class MessageRepository(TableRepository[ContactMessage, ContactMessageRead]):
    model = ContactMessage
    read_model = ContactMessageRead

    def list_query(self):
        return select(ContactMessage).order_by(ContactMessage.created_at.desc())

    def mark_read(self, item_id: str) -> bool:
        return self.update(item_id, {"read": True}) is not None

    def set_starred(self, item_id: str, starred: bool) -> bool:
        return self.update(item_id, {"starred": starred}) is not None


class AboutRepository:
    """The about_info table holds at most one row, id "main"."""

    def __init__(self, db: Session):
        self.db = db

    def get(self) -> Optional[AboutInfoRead]:
        row = self.db.get(AboutInfo, ABOUT_ID)
        return AboutInfoRead.model_validate(row.model_dump()) if row else None

    def upsert(self, data: dict) -> AboutInfoRead:
        row = self.db.get(AboutInfo, ABOUT_ID)
        if row is None:
            row = AboutInfo(id=ABOUT_ID, **data)
        else:
            for key, value in data.items():
                setattr(row, key, value)
            row.updated_at = utcnow()
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return AboutInfoRead.model_validate(row.model_dump())


class LegalRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, doc_type: str) -> Optional[LegalDocRead]:
        if doc_type not in LEGAL_DOC_TYPES:
            return None
        row = self.db.get(LegalDoc, doc_type)
        if row is None:
            row = LegalDoc(id=doc_type, content=DEFAULT_LEGAL_TEXT[doc_type])
        return LegalDocRead.model_validate(row.model_dump())

    def put(self, doc_type: str, content: str) -> Optional[LegalDocRead]:
        if doc_type not in LEGAL_DOC_TYPES:
            return None
        row = self.db.get(LegalDoc, doc_type)
        if row is None:
            row = LegalDoc(id=doc_type, content=content)
        else:
            row.content = content
            row.updated_at = utcnow()
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return LegalDocRead.model_validate(row.model_dump())

    def ensure_defaults(self) -> int:
        created = 0
        for doc_type, text in DEFAULT_LEGAL_TEXT.items():
            if self.db.get(LegalDoc, doc_type) is None:
                self.db.add(LegalDoc(id=doc_type, content=text))
                created += 1
        self.db.commit()
        return created
