"""Ogla CLI application using Typer.

This module provides command-line utilities for the Ogla backend:
secret generation for deployment configuration, super admin
provisioning and running the API server.
"""

import asyncio
import secrets

import typer
import uvicorn
from rich.console import Console
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from ogla_auth import PasswordHashingService
from ogla_config.settings import Settings, get_settings
from ogla_identity.application.services import provision_super_admin
from ogla_identity.domain.user import CompanyRole, CompanyType, RegistrationData, User
from ogla_identity.exceptions import ConflictError, ValidationError
from ogla_identity.infrastructure.persistence.sqlalchemy import (
    Base,
    UserRepositorySQLAlchemy,
)

app = typer.Typer(
    name="ogla",
    help="Ogla - customer accounts for Ogla Shea Butter & General Trading",
    no_args_is_help=True,
)
console = Console()


# Create secrets subcommand group
secrets_app = typer.Typer(
    name="secrets",
    help="Secret generation utilities",
    no_args_is_help=True,
)
app.add_typer(secrets_app)

users_app = typer.Typer(
    name="users",
    help="User administration",
    no_args_is_help=True,
)
app.add_typer(users_app)


@secrets_app.command("generate")
def generate_secrets() -> None:
    """Generate secure secrets for Ogla configuration.

    Generates two required secrets:
    - JWT_SECRET_KEY: Secret for signing session, verification and reset tokens
    - POSTGRES_PASSWORD: Database password

    Copy the output to your .env file.
    """
    console.print("\n[bold green]Ogla Secret Generation[/bold green]")
    console.print("=" * 60)
    console.print(
        "\nGenerated secrets for your [bold].env[/bold] configuration file:\n"
    )

    # 64 bytes of entropy for HS256 signing
    jwt_secret = secrets.token_urlsafe(64)
    console.print(f"[cyan]JWT_SECRET_KEY[/cyan]={jwt_secret}")

    db_password = secrets.token_urlsafe(32)
    console.print(f"[cyan]POSTGRES_PASSWORD[/cyan]={db_password}")

    console.print("\n" + "=" * 60)
    console.print(
        "[yellow]⚠  Keep these secrets secure and never commit them "
        "to version control![/yellow]"
    )
    console.print(
        "[dim]Copy the above values to your config/.env (Docker) or "
        "config/.env.dev (local) file.[/dim]\n"
    )


async def _create_super_admin(
    settings: Settings,
    data: RegistrationData,
) -> User:
    engine = create_async_engine(settings.database_url, pool_pre_ping=True)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        session_maker = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        async with session_maker() as session:
            user = await provision_super_admin(
                UserRepositorySQLAlchemy(session),
                PasswordHashingService(rounds=settings.bcrypt_rounds),
                data,
            )
            await session.commit()
            return user
    finally:
        await engine.dispose()


@users_app.command("create-super-admin")
def create_super_admin(  # noqa: PLR0913
    email: str = typer.Option(..., "--email", help="Login email"),
    first_name: str = typer.Option(..., "--first-name"),
    last_name: str = typer.Option(..., "--last-name"),
    company_name: str = typer.Option(
        "Ogla Shea Butter & General Trading",
        "--company-name",
    ),
    company_type: str = typer.Option(CompanyType.OTHER.value, "--company-type"),
    company_role: str = typer.Option(CompanyRole.OWNER.value, "--company-role"),
    password: str = typer.Option(
        ...,
        prompt=True,
        hide_input=True,
        confirmation_prompt=True,
        help="Prompted when omitted",
    ),
) -> None:
    """Create an active, verified super admin account.

    Super admins may log in before verifying their email address.
    """
    data = RegistrationData(
        first_name=first_name,
        last_name=last_name,
        email=email,
        password=password,
        company_name=company_name,
        company_type=company_type,
        company_role=company_role,
    )

    try:
        user = asyncio.run(_create_super_admin(get_settings(), data))
    except ValidationError as e:
        console.print(f"[red]{e.message}[/red]")
        for error in e.errors:
            console.print(f"  [red]•[/red] {error['field']}: {error['message']}")
        raise typer.Exit(1) from e
    except ConflictError as e:
        console.print(f"[red]{e.message}: {email}[/red]")
        raise typer.Exit(1) from e

    console.print(
        f"[green]✓[/green] Super admin created: [bold]{user.full_name}[/bold] "
        f"<{user.email}> (id {user.id})"
    )


@app.command("serve")
def serve(
    host: str | None = typer.Option(None, help="Bind address (default: API_HOST)"),
    port: int | None = typer.Option(None, help="Port (default: API_PORT)"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """Run the API server with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "ogla.presentation.api.app:create_app",
        factory=True,
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=reload,
    )


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
