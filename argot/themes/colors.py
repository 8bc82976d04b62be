# Argot CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Color constants and the rich theme used by Argot output.

`OneColors` holds the hex colors used in help screens and error rendering,
and `get_theme()` exposes them as named rich styles so markup such as
`[error]` or `[command]` can be used with any console built by
`argot.console.get_console`.
"""
from rich.theme import Theme


class OneColors:
    """One Dark inspired palette."""

    BLACK = "#282C34"
    WHITE = "#ABB2BF"
    LIGHT_RED = "#E06C75"
    DARK_RED = "#BE5046"
    GREEN = "#98C379"
    LIGHT_YELLOW = "#E5C07B"
    DARK_YELLOW = "#D19A66"
    BLUE = "#61AFEF"
    MAGENTA = "#C678DD"
    CYAN = "#56B6C2"
    COMMENT_GREY = "#5C6370"

    LIGHT_RED_b = f"bold {LIGHT_RED}"
    DARK_RED_b = f"bold {DARK_RED}"
    GREEN_b = f"bold {GREEN}"
    BLUE_b = f"bold {BLUE}"
    CYAN_b = f"bold {CYAN}"


def get_theme() -> Theme:
    return Theme(
        {
            "banner": OneColors.BLUE_b,
            "command": OneColors.CYAN,
            "description": OneColors.WHITE,
            "parameter": OneColors.LIGHT_YELLOW,
            "error": OneColors.DARK_RED_b,
            "hint": OneColors.COMMENT_GREY,
        }
    )
