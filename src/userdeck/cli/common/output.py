"""Output formatting utilities for the CLI."""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import AbstractSet, Any, Iterable, Mapping

import questionary
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.theme import Theme

from userdeck.cli.common.tui_style import QUESTIONARY_STYLE_CONFIRM
from userdeck.core.query import Page
from userdeck.core.users import User

_THEME = Theme(
    {
        "ok": "bold green",
        "warn": "yellow",
        "err": "bold red",
        "title": "bold cyan",
        "meta": "dim",
        "fav": "bold magenta",
    }
)

console = Console(theme=_THEME)
err_console = Console(theme=_THEME, stderr=True)


def setup_logging(verbose: bool = False) -> None:
    """Route library logging through rich on stderr."""
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, RichHandler):
            root.removeHandler(handler)
    root.addHandler(
        RichHandler(console=err_console, show_path=False, rich_tracebacks=True)
    )
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.INFO if verbose else logging.WARNING)


@dataclass(frozen=True)
class Out:
    """Output formatter for CLI messages and tables."""

    def info(self, msg: str) -> None:
        """Print an info message."""
        console.print(f"[title]›[/] {msg}")

    @contextmanager
    def status(self, msg: str):
        """Show a transient status spinner while work is in progress."""
        with console.status(msg, spinner="dots"):
            yield

    def success(self, msg: str) -> None:
        """Print a success message."""
        console.print(f"[ok]✓[/] {msg}")

    def warn(self, msg: str) -> None:
        """Print a warning message."""
        console.print(f"[warn]⚠[/] {msg}")

    def error(self, msg: str) -> None:
        """Print an error message."""
        console.print(f"[err]✗[/] {msg}")

    def header(self, title: str) -> None:
        """Print a header message."""
        console.print(f"[title]{title}[/]")

    def kv(self, items: Mapping[str, Any]) -> None:
        """Print key-value pairs."""
        for k, v in items.items():
            console.print(f"[meta]{k}[/]: {v}")

    def json(self, data: Any) -> None:
        """Print data as pretty JSON."""
        console.print_json(json.dumps(data))

    def confirm(self, message: str, *, default: bool = False) -> bool:
        """
        Ask the user for confirmation using a standardized Questionary prompt.

        Args:
            message: Confirmation question shown to the user.
            default: Default answer if the user just presses enter.

        Returns:
            True if the user confirms, False otherwise.
        """
        console.print("[meta]Use y/n then Enter[/]")
        prompt = questionary.confirm(
            f"[userdeck] {message}",
            default=default,
            style=QUESTIONARY_STYLE_CONFIRM,
            qmark="✦",
        )
        return bool(prompt.ask())

    def users_table(
        self,
        users: Iterable[User],
        *,
        favorites: AbstractSet[int] = frozenset(),
        title: str = "Users",
    ) -> None:
        """Render users as a table; favorites are marked with a heart."""
        t = Table(title=title, show_lines=False)
        t.add_column("ID", style="ok", no_wrap=True, justify="right")
        t.add_column("", style="fav", no_wrap=True)
        t.add_column("Full Name")
        t.add_column("Email")
        t.add_column("Username", style="meta")
        t.add_column("Company", style="meta")

        for u in users:
            t.add_row(
                str(u.id),
                "♥" if u.id in favorites else "",
                u.name,
                u.email,
                u.username,
                u.company.name if u.company else "",
            )

        console.print(t)

    def user_details(self, user: User, *, favorite: bool = False) -> None:
        """Render every field of a single user."""
        self.header(f"{user.name} (id: {user.id})" + (" [fav]♥[/]" if favorite else ""))
        items: dict[str, Any] = {
            "Username": user.username,
            "Email": user.email,
            "Phone": user.phone,
            "Website": user.website,
        }
        if user.company:
            items["Company"] = user.company.name
            items["Catch phrase"] = user.company.catch_phrase
        if user.address:
            items["Address"] = ", ".join(
                part
                for part in (
                    user.address.street,
                    user.address.suite,
                    user.address.city,
                    user.address.zipcode,
                )
                if part
            )
        self.kv(items)

    def page_footer(self, page: Page) -> None:
        """Print which page of how many is being shown."""
        console.print(
            f"[meta]Page {page.page + 1}/{page.page_count} "
            f"({page.item_count} matching users)[/]"
        )

    def users_json(self, users: Iterable[User]) -> None:
        """Print users as a JSON array of payloads."""
        self.json([u.to_payload() for u in users])


out = Out()
