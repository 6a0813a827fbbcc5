"""Database management commands for the seopanel CLI."""
import asyncio
import subprocess
import sys
from pathlib import Path

import click

from seopanel.core.database import create_all, engine, mask_url
from seopanel.core.config import settings


def get_project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent.parent


@click.group()
def db_group() -> None:
    """Database management commands."""
    pass


@db_group.command()
def init() -> None:
    """Create the SEO tables directly from the models (development only)."""
    click.echo(click.style(f"Creating tables on {mask_url(settings.database_url)}...", fg="yellow"))

    async def _run() -> None:
        await create_all()
        await engine.dispose()

    asyncio.run(_run())
    click.echo(click.style("✓ Tables created", fg="green"))


@db_group.command()
@click.argument("revision", default="head")
def migrate(revision: str) -> None:
    """Run Alembic migrations up to REVISION (default: head)."""
    click.echo(click.style(f"Upgrading database to {revision}...", fg="yellow"))
    result = subprocess.run(
        [sys.executable, "-m", "alembic", "upgrade", revision],
        cwd=get_project_root(),
    )
    if result.returncode != 0:
        click.echo(click.style("✗ Migration failed", fg="red"))
        raise click.Abort()
    click.echo(click.style("✓ Migrations complete", fg="green"))
