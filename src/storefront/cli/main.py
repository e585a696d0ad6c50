import asyncio
import datetime
import logging
from typing import Optional

import typer
from tortoise import Tortoise
from tortoise.exceptions import IntegrityError

from ..core.database import TORTOISE_ORM
from ..core.logging_config import configure_logging
from ..features.auth.models import Role, User as AuthUser
from ..features.auth.security import get_password_hash
from ..features.reports.job import ReportJobStatus, generate_daily_report

logger = logging.getLogger(__name__)

app = typer.Typer(name="storefront-cli", help="CLI for managing Storefront POS data.")


# Shared async context manager for database connection
class DBConnection:
    async def __aenter__(self):
        await Tortoise.init(config=TORTOISE_ORM)
        await Tortoise.generate_schemas(safe=True)  # Generate schema if it doesn't exist
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await Tortoise.close_connections()


# User management commands
user_app = typer.Typer(name="users", help="Manage user accounts.")
app.add_typer(user_app)

# Report commands
report_app = typer.Typer(name="reports", help="Generate and inspect daily reports.")
app.add_typer(report_app)


@user_app.command("create-admin")
def create_admin_user_command(
    email: str = typer.Option(..., prompt=True, help="Email for the new admin."),
    name: str = typer.Option(..., prompt=True, help="Display name for the new admin."),
    password: str = typer.Option(..., prompt=True, hide_input=True, confirmation_prompt=True, help="Password for the new admin.")
):
    """Creates a new admin user."""
    code = asyncio.run(_create_admin_user(email, name, password))
    raise typer.Exit(code=code)


async def _create_admin_user(email: str, name: str, password: str) -> int:
    """Async implementation for creating an admin user."""
    email = email.strip().lower()
    async with DBConnection():
        typer.echo(f"Attempting to create admin user: {name} ({email})...")
        if await AuthUser.filter(email=email).exists():
            typer.secho(f"Error: User with email '{email}' already exists.", fg=typer.colors.RED)
            return 1
        try:
            admin_user = await AuthUser.create(
                email=email,
                name=name,
                hashed_password=get_password_hash(password),
                role=Role.ADMIN,
                is_active=True,
            )
        except IntegrityError as e:
            typer.secho(f"Error creating admin user: {e}", fg=typer.colors.RED)
            return 1
        typer.secho(f"Admin user '{admin_user.email}' created successfully with ID: {admin_user.public_id}", fg=typer.colors.GREEN)
        return 0


@user_app.command("disable-user")
def disable_user_account_command(
    email: str = typer.Argument(..., help="The email of the user to disable. Tokens already issued to the user stop working too.")
):
    """Disables an existing user's account."""
    code = asyncio.run(_set_user_active(email, False))
    raise typer.Exit(code=code)


@user_app.command("enable-user")
def enable_user_account_command(
    email: str = typer.Argument(..., help="The email of the user to enable.")
):
    """Enables an existing user's account."""
    code = asyncio.run(_set_user_active(email, True))
    raise typer.Exit(code=code)


async def _set_user_active(email: str, active: bool) -> int:
    state = "active" if active else "inactive"
    async with DBConnection():
        user = await AuthUser.get_or_none(email=email.strip().lower())
        if not user:
            typer.secho(f"Error: User with email '{email}' not found.", fg=typer.colors.RED)
            return 1
        if user.is_active == active:
            typer.secho(f"User '{email}' is already {state}.", fg=typer.colors.YELLOW)
            return 0
        user.is_active = active
        await user.save(update_fields=["is_active"])
        typer.secho(f"User '{email}' is now {state}.", fg=typer.colors.GREEN)
        return 0


@report_app.command("generate")
def generate_report_command(
    date: Optional[datetime.datetime] = typer.Option(
        None, formats=["%Y-%m-%d"], help="Business day to report on (default: today)."
    ),
):
    """Generates the daily report for a day, unless one already exists."""
    code = asyncio.run(_generate_report(date.date() if date else None))
    raise typer.Exit(code=code)


async def _generate_report(day: Optional[datetime.date]) -> int:
    async with DBConnection():
        result = await generate_daily_report(day)
    if result.status == ReportJobStatus.PERSISTED:
        report = result.report
        typer.secho(
            f"Report {result.date}: sales {report.total_sales:.2f}, expenses {report.total_expenses:.2f}, "
            f"net {report.net_profit:.2f}",
            fg=typer.colors.GREEN,
        )
        return 0
    if result.status == ReportJobStatus.SKIPPED:
        typer.secho(f"A report for {result.date} already exists.", fg=typer.colors.YELLOW)
        return 0
    typer.secho(f"Report generation for {result.date} failed: {result.error}", fg=typer.colors.RED)
    return 1


@app.callback()
def main():
    configure_logging()


if __name__ == "__main__":
    app()
