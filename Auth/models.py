# Auth/models.py
import uuid

from sqlmodel import Field, SQLModel


def new_id() -> str:
    return str(uuid.uuid4())


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: str = Field(default_factory=new_id, primary_key=True)
    username: str = Field(index=True, unique=True, nullable=False)
    hashed_password: str
    is_admin: bool = Field(default=True)
