import asyncio
from typing import Optional

import typer
import uvicorn

from blog_api.core.config import Settings
from blog_api.core.database import Database
from blog_api.core.logging_config import configure_logging
from blog_api.apps.blog.repositories.post_repository import PostRepository
from blog_api.apps.blog.seed import seed_posts

app = typer.Typer(help="CLI for running and managing the blog posts API.")

DATABASE_URL_OPTION = typer.Option(
    None, "--database-url", help="Override DATABASE_URL from the environment"
)


# ---------------------------
# Helpers
# ---------------------------
def get_settings(database_url: Optional[str]) -> Settings:
    settings = Settings()
    if database_url:
        settings = settings.model_copy(update={"DATABASE_URL": database_url})
    configure_logging(settings.LOG_LEVEL)
    return settings


def run_with_database(settings: Settings, action):
    """Open the database, run ``action(database)`` and always close it."""

    async def runner():
        database = Database(
            settings.DATABASE_URL,
            echo=settings.DATABASE_ECHO,
            time_zone=settings.TIME_ZONE,
        )
        await database.connect()
        try:
            return await action(database)
        finally:
            await database.disconnect()

    return asyncio.run(runner())


# ---------------------------
# Commands
# ---------------------------
@app.command()
def serve(
    host: Optional[str] = typer.Option(None, help="Bind host"),
    port: Optional[int] = typer.Option(None, help="Bind port"),
    reload: bool = typer.Option(False, help="Enable auto-reload in development"),
):
    """Run the API with uvicorn."""
    settings = get_settings(None)
    uvicorn.run(
        "blog_api.main:app",
        host=host or settings.HOST,
        port=port or settings.PORT,
        reload=reload,
        log_level=settings.LOG_LEVEL.lower(),
    )


@app.command()
def init_db(database_url: Optional[str] = DATABASE_URL_OPTION):
    """Create the database tables."""

    async def action(database: Database):
        return None

    settings = get_settings(database_url)
    run_with_database(settings, action)
    print(f"✅ Database ready: {settings.DATABASE_URL}")


@app.command()
def seed(
    count: int = typer.Option(10, "--count", "-n", min=1, help="Number of posts"),
    database_url: Optional[str] = DATABASE_URL_OPTION,
):
    """Insert generated blog posts."""

    async def action(database: Database):
        repository = PostRepository(database.get_session, get_now=database.now)  # type:ignore
        return await seed_posts(repository, count=count)

    posts = run_with_database(get_settings(database_url), action)
    print(f"🌱 Seeded {len(posts)} posts")


@app.command()
def count(database_url: Optional[str] = DATABASE_URL_OPTION):
    """Print the number of stored posts."""

    async def action(database: Database):
        return await PostRepository(database.get_session).count()  # type:ignore

    print(run_with_database(get_settings(database_url), action))


@app.command()
def drop_db(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
    database_url: Optional[str] = DATABASE_URL_OPTION,
):
    """Drop every table in the database."""
    settings = get_settings(database_url)
    if not yes:
        typer.confirm(f"Drop all tables in {settings.DATABASE_URL}?", abort=True)

    async def action(database: Database):
        await database.drop_database()

    run_with_database(settings, action)
    print("🗑️  Database dropped")


# ---------------------------
# Entrypoint
# ---------------------------
if __name__ == "__main__":
    app()
