"""Main CLI entry point for seopanel commands."""
import asyncio
from datetime import timedelta
from typing import Optional

import click

from seopanel import __version__
from seopanel.cli import db
from seopanel.core.auth import create_access_token
from seopanel.core.security.rbac import Role
from seopanel.seo.cache import build_cache
from seopanel.seo.catalog import default_catalog


@click.group()
@click.version_option(version=__version__)
def cli() -> None:
    """SEO Panel - page metadata administration CLI."""
    pass


# Register command groups
cli.add_command(db.db_group, name="db")


@cli.group(name="cache")
def cache_group() -> None:
    """Listing cache commands."""
    pass


@cache_group.command(name="clear")
@click.option("--site", "site_id", default=None, help="Only clear entries of this site")
@click.option("--backend", default=None, type=click.Choice(["memory", "redis"]), help="Cache backend")
def clear_cache(site_id: Optional[str], backend: Optional[str]) -> None:
    """Drop cached listings."""
    cache = build_cache(backend)

    async def _run() -> int:
        if site_id:
            return await cache.invalidate_site(site_id)
        return await cache.clear_all()

    removed = asyncio.run(_run())
    click.echo(click.style(f"✓ Removed {removed} cache entries", fg="green"))


@cli.group(name="catalog")
def catalog_group() -> None:
    """Page catalog commands."""
    pass


@catalog_group.command(name="list")
@click.option("--category", default=None, help="Only list pages of this category")
def list_catalog(category: Optional[str]) -> None:
    """List the predefined pages."""
    catalog = default_catalog()
    pages = catalog.by_category(category) if category else list(catalog)
    for page in pages:
        click.echo(f"{page.path:<60} {page.default_slug:<45} {page.category.value}")
    click.echo(click.style(f"{len(pages)} pages", fg="green"))


@cli.group(name="token")
def token_group() -> None:
    """Access token commands."""
    pass


@token_group.command(name="create")
@click.argument("user_id")
@click.option("--role", default=Role.EDITOR.value, type=click.Choice([role.value for role in Role]))
@click.option("--minutes", default=None, type=int, help="Token lifetime in minutes")
def create_token(user_id: str, role: str, minutes: Optional[int]) -> None:
    """Issue a bearer token for USER_ID."""
    expires = timedelta(minutes=minutes) if minutes else None
    click.echo(create_access_token({"sub": user_id, "role": role}, expires_delta=expires))


if __name__ == "__main__":
    cli()
