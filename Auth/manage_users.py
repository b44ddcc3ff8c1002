# Auth/manage_users.py
import getpass

import typer
from sqlmodel import Session, select
from tabulate import tabulate

from Auth.models import User
from Auth.security import create_user, hash_password
from Core.database import init_db, make_engine
from Core.settings import load_settings
from Portfolio.seed import seed_content

cli = typer.Typer(help="Portfolio admin user management")


def _engine():
    settings = load_settings()
    engine = make_engine(settings.database_url)
    init_db(engine)
    return engine, settings


@cli.command()
def add(username: str = typer.Argument(...)):
    """Add a new admin user."""
    engine, settings = _engine()
    pwd = getpass.getpass("Password: ")
    with Session(engine) as s:
        if s.exec(select(User).where(User.username == username)).first():
            typer.echo("❌ Already exists"); raise typer.Exit(1)
        create_user(s, username, pwd, settings.password_pepper)
        typer.echo("✅ Created")


@cli.command()
def passwd(username: str):
    """Change a password."""
    engine, settings = _engine()
    pwd = getpass.getpass("New password: ")
    with Session(engine) as s:
        user = s.exec(select(User).where(User.username == username)).first()
        if not user: typer.echo("❌ Not found"); raise typer.Exit(1)
        user.hashed_password = hash_password(pwd, settings.password_pepper)
        s.add(user); s.commit(); typer.echo("🔑 Changed")


@cli.command()
def delete(username: str):
    """Remove a user."""
    engine, _ = _engine()
    with Session(engine) as s:
        user = s.exec(select(User).where(User.username == username)).first()
        if not user: typer.echo("❌ Not found"); raise typer.Exit(1)
        s.delete(user); s.commit(); typer.echo("🗑️  Deleted")


@cli.command("list")
def list_users(
    full: bool = typer.Option(False, help="Show password hashes too"),
):
    """List all users (id, username, admin flag, optional hash)."""
    engine, _ = _engine()
    cols = [User.id, User.username, User.is_admin]
    headers = ["id", "username", "is_admin"]

    if full:
        cols.append(User.hashed_password)
        headers.append("hashed_password")

    with Session(engine) as s:
        rows = s.exec(select(*cols)).all()

    print(tabulate(rows, headers=headers))


@cli.command()
def seed(
    username: str = typer.Option("admin", help="Admin username"),
    password: str = typer.Option("admin123", help="Admin password"),
):
    """Create the admin user and sample content where missing."""
    engine, settings = _engine()
    with Session(engine) as s:
        report = seed_content(s, username, password, settings.password_pepper)
    print(tabulate(sorted(report.items()), headers=["item", "created"]))
    typer.echo("🎉 Seed finished")


if __name__ == "__main__":
    cli()
