"""Terminal UI utilities for picking users."""

from __future__ import annotations

from typing import AbstractSet

import questionary

from userdeck.cli.common.tui_style import QUESTIONARY_STYLE_SELECT
from userdeck.core.users import User

_MAX_USER_NAME_WIDTH = 48


def _truncate(text: str, max_len: int) -> str:
    """Return text capped at max_len characters using an ASCII ellipsis."""
    if max_len <= 3 or len(text) <= max_len:
        return text[:max_len]
    return f"{text[: max_len - 3]}..."


def _user_choice_title(user: User, *, name_width: int) -> str:
    """Format one user choice as `<name>  (id: <id>)` with aligned id column."""
    short_name = _truncate(user.name, _MAX_USER_NAME_WIDTH)
    return f"{short_name.ljust(name_width)}  (id: {user.id})"


def select_favorites(users: list[User], favorite_ids: AbstractSet[int]) -> list[User] | None:
    """Display a checkbox prompt with current favorites pre-checked.

    Args:
        users: Users to choose from.
        favorite_ids: Ids that start out checked.

    Returns:
        The checked users, or None if the prompt was cancelled.
    """
    shown_names = [_truncate(u.name, _MAX_USER_NAME_WIDTH) for u in users]
    name_width = max((len(name) for name in shown_names), default=0)

    choices = [
        questionary.Choice(
            title=_user_choice_title(u, name_width=name_width),
            value=u,
            checked=u.id in favorite_ids,
        )
        for u in users
    ]

    return questionary.checkbox(
        "Select favorite users:",
        choices=choices,
        style=QUESTIONARY_STYLE_SELECT,
    ).ask()
