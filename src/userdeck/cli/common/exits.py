"""Exit helpers shared by the userdeck commands.

Every command ends through one of these so messages and exit codes stay
uniform: 0 for normal endings, 1 for data or storage failures, 2 for
invalid input.
"""

from typing import NoReturn

import typer

from userdeck.cli.common.output import out
from userdeck.core.drafts import DraftValidationError
from userdeck.core.users import UsersSnapshot


def ok_exit(msg: str | None = None) -> NoReturn:
    if msg:
        out.info(msg)
    raise typer.Exit(0)


def die(msg: str, code: int = 1) -> NoReturn:
    out.error(msg)
    raise typer.Exit(code)


def warn_exit(msg: str, code: int = 0) -> NoReturn:
    out.warn(msg)
    raise typer.Exit(code)


def exit_from_exc(exc: Exception, *, message: str, code: int = 1) -> NoReturn:
    """Print message and exit, keeping exc as the cause."""
    out.error(message)
    raise typer.Exit(code) from exc


def require_users(snapshot: UsersSnapshot) -> None:
    """Exit with code 1 when the users fetch failed."""
    if snapshot.is_error:
        die(f"Error loading data: {snapshot.error}", code=1)


def invalid_draft_exit(exc: DraftValidationError) -> NoReturn:
    """List every validation error of a draft, then exit with code 2."""
    for msg in exc.errors:
        out.error(msg)
    raise typer.Exit(2) from exc


def storage_exit(exc: OSError) -> NoReturn:
    """Report a favorites write that did not reach storage."""
    exit_from_exc(exc, message=f"Could not save favorites: {exc}", code=1)
