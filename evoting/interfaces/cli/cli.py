"""Command line entry point."""

import click

from evoting import __version__
from evoting.common.logging import configure_logging
from evoting.infrastructure.config.settings import get_settings
from evoting.interfaces.cli.base import with_error_handling
from evoting.interfaces.cli.commands.admin_commands import (
    CreateAdminCommand,
    FinishElapsedCommand,
)


@click.group()
@click.version_option(__version__, prog_name="evoting")
def cli():
    """evoting backend administration."""
    config = get_settings()
    configure_logging(config.log_level, config.log_json)


@cli.command("create-admin")
@click.option("--name", required=True, help="Display name of the admin")
@click.option("--email", required=True, help="Login e-mail of the admin")
@click.password_option(help="Password (prompted when omitted)")
@with_error_handling
def create_admin(name: str, email: str, password: str):
    """Create a verified ADMIN account."""
    CreateAdminCommand().execute(name=name, email=email, password=password)


@cli.command("finish-elapsed")
@with_error_handling
def finish_elapsed():
    """Finish ONGOING elections whose vote window has passed."""
    FinishElapsedCommand().execute()


@cli.command()
@click.option("--host", default="127.0.0.1", help="Bind address")
@click.option("--port", default=8000, type=int, help="Bind port")
@click.option("--reload", is_flag=True, help="Reload on code changes")
def serve(host: str, port: int, reload: bool):
    """Run the REST API with uvicorn."""
    import uvicorn

    uvicorn.run(
        "evoting.interfaces.web.api.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )


def main():
    cli()


if __name__ == "__main__":
    main()
