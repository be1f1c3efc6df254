"""
Restaurant API CLI.

Command-line interface for database setup, demo data, daily content
generation and health checks.
"""

import asyncio
import sys
import time
from datetime import date
from pathlib import Path

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent))

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

app = typer.Typer(
    name="restaurant",
    help="Restaurant API management CLI",
    add_completion=False,
)
console = Console()


# =============================================================================
# Database Commands
# =============================================================================

@app.command()
def db_init():
    """Create all database tables from the ORM models."""
    from sqlalchemy.exc import SQLAlchemyError

    from rest_api.models import Base
    from shared.infrastructure.db import engine

    console.print(f"[blue]Creating tables on: {engine.dialect.name}[/blue]")
    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError as e:
        console.print(f"[red]✗ Table creation failed: {e}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]✓ {len(Base.metadata.tables)} tables created/verified[/green]")


@app.command()
def db_seed(
    force: bool = typer.Option(False, "--force", "-f", help="Allow seeding in production"),
):
    """Seed the database with a demo restaurant."""
    from rest_api.seed import DEMO_RESTAURANT_ID, seed
    from shared.config.settings import settings
    from shared.infrastructure.db import get_db_context

    if settings.environment == "production" and not force:
        console.print("[red]Cannot seed production without --force[/red]")
        raise typer.Exit(1)

    with get_db_context() as db:
        inserted = seed(db)

    if inserted:
        console.print(f"[green]✓ Demo restaurant {DEMO_RESTAURANT_ID} created[/green]")
    else:
        console.print("[yellow]Database already has data, nothing seeded[/yellow]")


# =============================================================================
# Current Affairs Commands
# =============================================================================

@app.command()
def generate_daily(
    day: str = typer.Option(None, "--date", "-d", help="Date to generate (YYYY-MM-DD), default today"),
):
    """Generate current affairs for a day. With --date, regenerates even if data exists."""
    from rest_api.services.domain.daily_generator_service import DailyGeneratorService
    from rest_api.services.external import close_http_clients
    from shared.infrastructure.db import get_db_context
    from shared.utils.exceptions import AppException

    target = None
    if day:
        try:
            target = date.fromisoformat(day)
        except ValueError:
            console.print("[red]Invalid date format. Use YYYY-MM-DD[/red]")
            raise typer.Exit(1)

    async def _generate():
        try:
            with get_db_context() as db:
                service = DailyGeneratorService(db)
                if target is None:
                    return await service.generate_daily()
                return await service.generate_for_date(target)
        finally:
            await close_http_clients()

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        progress.add_task("Generating current affairs...", total=None)
        try:
            result = asyncio.run(_generate())
        except AppException as e:
            console.print(f"[red]✗ Generation failed: {e.detail}[/red]")
            raise typer.Exit(1)

    color = "green" if result["generated"] else "yellow"
    console.print(f"[{color}]{result['message']}[/{color}]")


@app.command()
def cleanup_affairs(
    days: int = typer.Option(None, "--days", help="Retention in days, default from settings"),
):
    """Delete current affairs older than the retention period."""
    from rest_api.services.domain.current_affairs_service import CurrentAffairsService
    from shared.infrastructure.db import get_db_context

    with get_db_context() as db:
        removed = CurrentAffairsService(db).cleanup(days)
    console.print(f"[green]✓ Removed {removed} items[/green]")


# =============================================================================
# Health Commands
# =============================================================================

@app.command()
def health(
    url: str = typer.Option("http://localhost:8000/api/health", help="REST API health URL"),
):
    """Check system health."""
    import httpx

    async def _health():
        from sqlalchemy import text

        from shared.infrastructure.db import SessionLocal
        from shared.infrastructure.events import close_redis_pool, get_redis_pool

        table = Table(title="Service Health")
        table.add_column("Service", style="cyan")
        table.add_column("Status", style="green")
        table.add_column("Response Time", style="yellow")

        async with httpx.AsyncClient(timeout=5.0) as client:
            try:
                start = time.perf_counter()
                response = await client.get(url)
                elapsed = (time.perf_counter() - start) * 1000
                if response.status_code == 200:
                    table.add_row("REST API", "✓ Healthy", f"{elapsed:.0f}ms")
                else:
                    table.add_row("REST API", f"✗ Status {response.status_code}", f"{elapsed:.0f}ms")
            except httpx.HTTPError as e:
                table.add_row("REST API", f"✗ {type(e).__name__}", "-")

        try:
            start = time.perf_counter()
            with SessionLocal() as db:
                db.execute(text("SELECT 1"))
            elapsed = (time.perf_counter() - start) * 1000
            table.add_row("Database", "✓ Healthy", f"{elapsed:.0f}ms")
        except Exception as e:
            table.add_row("Database", f"✗ {type(e).__name__}", "-")

        try:
            start = time.perf_counter()
            redis = await get_redis_pool()
            await redis.ping()
            elapsed = (time.perf_counter() - start) * 1000
            table.add_row("Redis", "✓ Healthy", f"{elapsed:.0f}ms")
        except Exception as e:
            table.add_row("Redis", f"✗ {type(e).__name__}", "-")
        finally:
            await close_redis_pool()

        console.print(table)

    asyncio.run(_health())


@app.command()
def version():
    """Show version information."""
    table = Table(title="Restaurant API Version")
    table.add_column("Component", style="cyan")
    table.add_column("Version", style="green")

    table.add_row("API", "0.1.0")
    table.add_row("Python", sys.version.split()[0])

    console.print(table)


if __name__ == "__main__":
    app()
