"""Display preference value objects and the decorative font catalog."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FontOption:
    """A selectable font: the CSS font-family value and its display name."""

    family: str
    name: str


AVAILABLE_FONTS: tuple[FontOption, ...] = (
    FontOption(family='"Fleur De Leah"', name="Fleur De Leah"),
    FontOption(family='"Kapakana"', name="Kapakana"),
    FontOption(family='"Pinyon Script"', name="Pinyon Script"),
    FontOption(family='"Monsieur La Doulaise"', name="Monsieur La Doulaise"),
    FontOption(family='"Ballet"', name="Ballet"),
    FontOption(family='"Imperial Script"', name="Imperial Script"),
    FontOption(family='"Mea Culpa"', name="Mea Culpa"),
    FontOption(family='"My Soul"', name="My Soul"),
    FontOption(family='"Updock"', name="Updock"),
    FontOption(family='"Lavishly Yours"', name="Lavishly Yours"),
)


@dataclass
class DisplaySettings:
    """User display preferences applied when rendering quotes."""

    font_family: str = AVAILABLE_FONTS[0].family
    font_size: int = 48
    dark_mode: bool = True


DEFAULT_DISPLAY_SETTINGS = DisplaySettings()
