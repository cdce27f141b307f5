"""CLI application for browsing JSONPlaceholder users."""

import typer

from userdeck.cli.commands.favorites import app as favorites_app
from userdeck.cli.commands.users import app as users_app

app = typer.Typer(
    help="userdeck - browse users and keep favorites",
    no_args_is_help=True,
)

app.add_typer(users_app, name="users", help="List / show / edit users.")
app.add_typer(favorites_app, name="favorites", help="Toggle and list favorite users.")


if __name__ == "__main__":
    app()
