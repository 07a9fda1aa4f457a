"""
PrettyVal color themes.

A theme assigns an optional `rich` style to each semantic category of scalar
output and carries the `strftime` layout used for timestamps. Categories
without a style are written unchanged, so `Theme()` is a plain, colorless
theme.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from dataclasses import dataclass, replace
from enum import Enum, unique
from typing import IO

# Third-party ----------------------------------------------------------------------------------------------------------
from rich.color import ColorSystem
from rich.console import Console
from rich.style import Style

# Local ----------------------------------------------------------------------------------------------------------------
from .utils import fmt_type

# Constants ------------------------------------------------------------------------------------------------------------

DEFAULT_TIME_LAYOUT = "%Y-%m-%dT%H:%M:%S%z"

COLOR_SYSTEMS = {
    "standard": ColorSystem.STANDARD,
    "256": ColorSystem.EIGHT_BIT,
    "truecolor": ColorSystem.TRUECOLOR,
    "windows": ColorSystem.WINDOWS,
}


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class Category(str, Enum):
    """Semantic categories of styled scalar output."""
    NIL = "nil"
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    BOOLEAN = "boolean"
    TIMESTAMP = "timestamp"


@dataclass(frozen=True)
class Theme:
    """
    Style assignment per output category.

    Styles may be given as `rich.style.Style` instances or as style definitions
    accepted by `Style.parse()`, such as "bold blue".

    Attributes:
        nil: Style of the nil marker.
        integer: Style of integers and raw bytes.
        float: Style of floats.
        string: Style of quoted strings.
        boolean: Style of true/false.
        timestamp: Style of dates and datetimes.
        time_layout: strftime layout of dates and datetimes.
        color_system: rich color system used to emit ANSI codes.

    Examples:
        >>> Theme(integer="bold").paint(Category.INTEGER, "42")
        '\\x1b[1m42\\x1b[0m'
        >>> Theme().paint(Category.INTEGER, "42")
        '42'
    """
    nil: Style | None = None
    integer: Style | None = None
    float: Style | None = None
    string: Style | None = None
    boolean: Style | None = None
    timestamp: Style | None = None
    time_layout: str = DEFAULT_TIME_LAYOUT
    color_system: ColorSystem = ColorSystem.TRUECOLOR

    def __post_init__(self) -> None:
        """Parse style definitions and validate field types."""
        for category in Category:
            style = getattr(self, category.value)
            if style is None or isinstance(style, Style):
                continue
            if isinstance(style, str):
                object.__setattr__(self, category.value, Style.parse(style))
            else:
                raise TypeError(f"Theme.{category.value} must be a Style, str or None, got {fmt_type(style)}")

        if not isinstance(self.time_layout, str):
            raise TypeError(f"Theme.time_layout must be a str, got {fmt_type(self.time_layout)}")

        if isinstance(self.color_system, str):
            if self.color_system not in COLOR_SYSTEMS:
                raise ValueError(
                    f"Theme.color_system must be one of {sorted(COLOR_SYSTEMS)}, but got {self.color_system!r}")
            object.__setattr__(self, "color_system", COLOR_SYSTEMS[self.color_system])
        elif not isinstance(self.color_system, ColorSystem):
            raise TypeError(f"Theme.color_system must be a ColorSystem or str, got {fmt_type(self.color_system)}")

    # Class Methods ------------------------------------

    @classmethod
    def default(cls) -> "Theme":
        """Create the default colored theme using the 16 standard terminal colors."""
        return cls(
            nil=Style(color="magenta", bold=True),
            integer=Style(color="blue"),
            float=Style(color="cyan"),
            string=Style(color="green"),
            boolean=Style(color="yellow"),
            timestamp=Style(color="bright_blue"),
            color_system=ColorSystem.STANDARD,
        )

    @classmethod
    def for_terminal(cls, file: IO[str] | None = None) -> "Theme | None":
        """
        Create the default theme downgraded to what the terminal behind `file` supports.

        Returns None when `file` is not a terminal or color is disabled
        (for example through the NO_COLOR environment variable).
        """
        console = Console(file=file)
        system = console.color_system
        if system is None or console.no_color:
            return None
        return replace(cls.default(), color_system=COLOR_SYSTEMS[system])

    # Methods and Properties ---------------------

    def style_for(self, category: Category | str) -> Style | None:
        """Return the style assigned to a category, or None."""
        return getattr(self, Category(category).value)

    def paint(self, category: Category | str, text: str) -> str:
        """Wrap `text` in the ANSI codes of the category's style; unstyled categories return `text` as is."""
        style = self.style_for(category)
        if style is None or not text:
            return text
        return style.render(text, color_system=self.color_system)

    @property
    def is_plain(self) -> bool:
        """True when no category carries a style."""
        return all(self.style_for(category) is None for category in Category)


DEFAULT_THEME = Theme.default()
