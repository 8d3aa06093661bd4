"""CLI commands for Do Something administration."""

import asyncio
from uuid import UUID

import typer

from dosomething.auth import create_access_token
from dosomething.config.database import async_session_manager
from dosomething.events.dependencies import get_rsvp_orchestrator
from dosomething.exceptions import NotFoundError, ValidationError
from dosomething.models.user import User
from dosomething.notifications.channels import get_notification_dispatcher
from dosomething.users.features.register_user.write_model import SqlRegisterUserWriteModel

app = typer.Typer(help="CLI commands for Do Something administration")


@app.command()
def create_user(
    email: str = typer.Option(..., "--email", "-e", help="Email address"),
    phone: str = typer.Option(..., "--phone", "-p", help="Phone number"),
    first_name: str = typer.Option("Test", "--first-name", "-f", help="First name"),
    last_name: str = typer.Option("User", "--last-name", "-l", help="Last name"),
    notify: str = typer.Option("email", "--notify", "-n", help="Preferred channel: sms or email"),
):
    """Register a user and print an access token for them."""
    try:
        registered = asyncio.run(
            SqlRegisterUserWriteModel().register_user(
                first_name=first_name,
                last_name=last_name,
                email=email,
                phone=phone,
                notify=notify,
            )
        )
    except ValidationError as e:
        for field, message in e.errors.items():
            typer.secho(f"  {field}: {message}", fg=typer.colors.RED)
        raise typer.Exit(1)

    typer.secho("User created!", fg=typer.colors.GREEN)
    typer.secho(f"  ID: {registered.user.uuid}", fg=typer.colors.CYAN)
    typer.secho(f"  Email: {registered.user.email}", fg=typer.colors.BLUE)
    typer.secho(f"  Token: {registered.token}", fg=typer.colors.CYAN)


@app.command()
def issue_token(
    user_id: str = typer.Argument(..., help="User UUID"),
):
    """Print a fresh access token for an existing user."""

    async def _find_user():
        async with async_session_manager(auto_commit=False) as session:
            return await session.get(User, UUID(user_id))

    user = asyncio.run(_find_user())
    if user is None:
        typer.secho(f"User not found: {user_id}", fg=typer.colors.RED)
        raise typer.Exit(1)
    typer.secho(f"Token for {user.email}:", fg=typer.colors.GREEN)
    typer.secho(create_access_token(user.uuid), fg=typer.colors.CYAN)


@app.command()
def send_reminders(
    event_id: str = typer.Argument(..., help="Event UUID"),
):
    """Send a reminder to everyone attending an event and wait for delivery."""

    async def _send():
        outcome = await get_rsvp_orchestrator().send_reminders(UUID(event_id))
        return await get_notification_dispatcher().deliver_all(outcome.deliveries)

    try:
        report = asyncio.run(_send())
    except NotFoundError as e:
        typer.secho(e.message, fg=typer.colors.RED)
        raise typer.Exit(1)

    typer.secho("Reminders sent!", fg=typer.colors.GREEN)
    typer.secho(f"  Attempted: {report.attempted}", fg=typer.colors.BLUE)
    if report.failed:
        typer.secho(f"  Failed: {report.failed}", fg=typer.colors.YELLOW)


if __name__ == "__main__":
    app()
