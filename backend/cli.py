"""
KitchenBiz operator CLI.

Command-line access to the session gate, tenant resolution and import
templates, for support and local debugging.
"""

import sys
from pathlib import Path
from typing import Optional

# Add backend to path for imports when run as a script
sys.path.insert(0, str(Path(__file__).parent))

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(
    name="kitchenbiz",
    help="KitchenBiz backend CLI",
    add_completion=False,
)
console = Console()


def _settings():
    from shared.config.settings import get_settings

    return get_settings()


# =============================================================================
# Access Commands
# =============================================================================


@app.command("check-access")
def check_access(
    path: str = typer.Argument(..., help="Request path, e.g. /inventory/purchase"),
    query: str = typer.Option("", "--query", "-q", help="Raw query string without '?'"),
    cookie: Optional[list[str]] = typer.Option(None, "--cookie", "-c", help="Cookie name present on the request (repeatable)"),
):
    """Show what the session gate would do with a request."""
    from shared.security.admission import AdmissionPolicy

    settings = _settings()
    policy = AdmissionPolicy.from_settings(settings)
    cookies = {name: "1" for name in (cookie or [])}
    decision = policy.decide(path, query, cookies)

    table = Table(title="Admission decision")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Path", path + (f"?{query}" if query else ""))
    table.add_row("Session cookie", settings.resolved_session_cookie_name)
    table.add_row("Public", "yes" if policy.is_public(path) else "no")
    table.add_row("Session present", "yes" if policy.has_session(cookies) else "no")
    table.add_row("Action", decision.action.value)
    table.add_row("Location", decision.location or "-")
    console.print(table)


@app.command("resolve-tenant")
def resolve_tenant(
    user_id: str = typer.Argument(..., help="Auth provider user id"),
):
    """Resolve a user's effective tenant against the configured database."""
    from rest_api.services.tenancy import SqlProfileStore, resolve_effective_tenant
    from shared.infrastructure.db import create_db_engine, create_session_factory, session_scope

    settings = _settings()
    engine = create_db_engine(settings.database_url)
    try:
        with session_scope(create_session_factory(engine)) as db:
            tenant = resolve_effective_tenant(user_id, SqlProfileStore(db), settings.demo_tenant_id)
    finally:
        engine.dispose()

    if tenant.tenant_id is None:
        console.print("[yellow]No tenant (no profile, no tenant assigned, or lookup failed)[/yellow]")
        raise typer.Exit(1)
    mode = "[magenta]demo[/magenta]" if tenant.use_demo else "own"
    console.print(f"[green]✓[/green] {tenant.tenant_id} ({mode})")


# =============================================================================
# Data Commands
# =============================================================================


@app.command()
def template(
    import_type: str = typer.Argument("receipts", help="receipts | sales | expenses"),
):
    """Print a CSV import template."""
    from rest_api.services.imports import TEMPLATES, get_template, render_template

    tpl = get_template(import_type)
    if tpl is None:
        console.print(f"[red]✗ Unknown type: {import_type} (expected one of {', '.join(TEMPLATES)})[/red]")
        raise typer.Exit(1)
    typer.echo(render_template(tpl), nl=False)


@app.command("db-init")
def db_init():
    """Create missing tables in the configured database."""
    from rest_api.models import Base
    from shared.infrastructure.db import create_db_engine

    engine = create_db_engine(_settings().database_url)
    try:
        Base.metadata.create_all(bind=engine)
    except Exception as e:
        console.print(f"[red]✗ Table creation failed: {e}[/red]")
        raise typer.Exit(1)
    finally:
        engine.dispose()
    console.print("[green]✓ Tables created/verified[/green]")


# =============================================================================
# Health Commands
# =============================================================================


@app.command()
def health(
    base_url: str = typer.Option("http://localhost:8000", help="REST API base URL"),
):
    """Check REST API health."""
    import time

    import httpx

    table = Table(title="Service Health")
    table.add_column("Service", style="cyan")
    table.add_column("Status", style="green")
    table.add_column("Response Time", style="yellow")

    start = time.time()
    try:
        response = httpx.get(f"{base_url.rstrip('/')}/api/health", timeout=5.0)
        elapsed = (time.time() - start) * 1000
        if response.status_code == 200:
            table.add_row("REST API", "✓ Healthy", f"{elapsed:.0f}ms")
        else:
            table.add_row("REST API", f"✗ Status {response.status_code}", f"{elapsed:.0f}ms")
    except httpx.HTTPError as e:
        table.add_row("REST API", f"✗ {type(e).__name__}", "-")

    console.print(table)


@app.command()
def version():
    """Show version information."""
    table = Table(title="KitchenBiz Version")
    table.add_column("Component", style="cyan")
    table.add_column("Version", style="green")

    table.add_row("API", "0.1.0")
    table.add_row("Python", sys.version.split()[0])

    console.print(table)


if __name__ == "__main__":
    app()
