from __future__ import annotations

from enum import Enum, auto
from typing import Callable, Mapping

from rich.errors import StyleSyntaxError
from rich.style import Style

from .errors import ConfigurationError


# every byte value falls into exactly one of these
class ByteClass(Enum):
    NULL = auto()
    CONTROL = auto()
    WHITESPACE = auto()
    PRINTABLE = auto()
    HIGHBIT = auto()
    EXTENDED = auto()


def ascii_byte_class(c: int) -> ByteClass:
    if c == 0x00:
        return ByteClass.NULL
    if 0x09 <= c <= 0x0D or c == 0x20:
        return ByteClass.WHITESPACE
    if c < 0x20 or c == 0x7F:
        return ByteClass.CONTROL
    if c < 0x7F:
        return ByteClass.PRINTABLE
    if c < 0xA0:
        return ByteClass.HIGHBIT
    return ByteClass.EXTENDED


class ColourProfile:
    """
    Maps byte values to a ByteClass and each class to a rich style string.

    The classifier is evaluated once for all 256 byte values when the
    profile is built, so classify() is a table lookup. Styles are parsed
    up front: a profile with a malformed style, or one whose classifier
    produces a class with no style, is rejected with ConfigurationError.
    """

    def __init__(
        self,
        name: str,
        styles: Mapping[ByteClass, str],
        classifier: Callable[[int], ByteClass] = ascii_byte_class,
        fallback_class: ByteClass = ByteClass.EXTENDED,
        fallback_style: str = "none",
    ):
        self.name = name
        self.classes = tuple(classifier(c) for c in range(256))
        self.fallback_class = fallback_class
        self.fallback_style = fallback_style
        self.styles: dict[ByteClass, str] = dict(styles)

        missing = set(self.classes) - set(self.styles)
        if missing:
            names = ", ".join(sorted(m.name for m in missing))
            raise ConfigurationError(f"colour profile {name} has no style for {names}")

        self._parsed: dict[ByteClass, Style] = {}
        for byte_class, spec in self.styles.items():
            self._parsed[byte_class] = self._parse(spec)
        self._fallback = self._parse(fallback_style)

    def _parse(self, spec: str) -> Style:
        try:
            return Style.parse(spec)
        except StyleSyntaxError as ex:
            raise ConfigurationError(
                f"colour profile {self.name} has bad style '{spec}': {ex}"
            ) from ex

    def classify(self, c: int) -> ByteClass:
        if 0 <= c < 256:
            return self.classes[c]
        return self.fallback_class

    def style_for(self, byte_class: ByteClass) -> str:
        return self.styles.get(byte_class, self.fallback_style)

    def style(self, c: int) -> Style:
        # parsed style for a byte value, used when rendering
        return self._parsed.get(self.classify(c), self._fallback)

    def __repr__(self) -> str:
        return f"ColourProfile({self.name!r})"


_profiles: dict[str, ColourProfile] = {}


def register_colour_profile(profile: ColourProfile) -> ColourProfile:
    if profile.name in _profiles:
        raise ConfigurationError(f"colour profile {profile.name} already registered")
    _profiles[profile.name] = profile
    return profile


def get_colour_profile(name: str) -> ColourProfile:
    try:
        return _profiles[name]
    except KeyError:
        raise ConfigurationError(
            f"unknown colour profile '{name}', choose from: "
            + ", ".join(colour_profile_names())
        ) from None


def colour_profile_names() -> list[str]:
    return sorted(_profiles)


DefaultColourProfile = register_colour_profile(
    ColourProfile(
        "DefaultColourProfile",
        {
            ByteClass.NULL: "bright_black",
            ByteClass.CONTROL: "red",
            ByteClass.WHITESPACE: "bold cyan",
            ByteClass.PRINTABLE: "green",
            ByteClass.HIGHBIT: "magenta",
            ByteClass.EXTENDED: "yellow",
        },
        fallback_style="bold white on red",
    )
)

# attributes only, for terminals where the palette is unreadable
MonochromeColourProfile = register_colour_profile(
    ColourProfile(
        "MonochromeColourProfile",
        {
            ByteClass.NULL: "dim",
            ByteClass.CONTROL: "reverse",
            ByteClass.WHITESPACE: "underline",
            ByteClass.PRINTABLE: "none",
            ByteClass.HIGHBIT: "bold",
            ByteClass.EXTENDED: "bold underline",
        },
        fallback_style="reverse",
    )
)
