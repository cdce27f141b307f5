"""prompt_toolkit styles for the two userdeck prompts.

The favorites picker colours checked rows like the `fav` heart of the
users table. The confirm prompt only guards clearing favorites, so it is red.
"""

from __future__ import annotations

from prompt_toolkit.styles import Style

_FAVORITE = "bold ansimagenta"
_MUTED = "ansibrightblack"

QUESTIONARY_STYLE_SELECT = Style.from_dict(
    {
        "question": "bold",
        "pointer": _FAVORITE,
        "highlighted": "bold",
        "selected": _FAVORITE,
        "instruction": _MUTED,
        "answer": _FAVORITE,
    }
)

QUESTIONARY_STYLE_CONFIRM = Style.from_dict(
    {
        "question": "bold ansired",
        "instruction": _MUTED,
        "answer": "bold ansired",
    }
)
