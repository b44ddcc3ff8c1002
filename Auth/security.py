# Auth/security.py
from typing import Optional, Protocol

from passlib.context import CryptContext
from sqlmodel import Session, select

from Auth.models import User

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def hash_password(password: str, pepper: str = "") -> str:
    return pwd_context.hash(password + pepper)


def verify_password(plain: str, hashed: str, pepper: str = "") -> bool:
    return pwd_context.verify(plain + pepper, hashed)


class CredentialVerifier(Protocol):
    def verify(self, username: str, password: str) -> Optional[User]:
        ...


class LocalCredentials:
    """Username/password check against the users table.

    Returns the User on success and None on any mismatch. Unknown usernames
    still pay for one hash verification so both failures take the same time.
    Storage errors propagate.
    """

    def __init__(self, db: Session, pepper: str = ""):
        self.db = db
        self.pepper = pepper

    def verify(self, username: str, password: str) -> Optional[User]:
        user: User | None = self.db.exec(
            select(User).where(User.username == username)
        ).first()
        if user is None:
            pwd_context.dummy_verify()
            return None
        if not verify_password(password, user.hashed_password, self.pepper):
            return None
        return user


def create_user(db: Session, username: str, password: str, pepper: str = "") -> User:
    user = User(username=username, hashed_password=hash_password(password, pepper))
    db.add(user)
    db.commit()
    db.refresh(user)
    return user
