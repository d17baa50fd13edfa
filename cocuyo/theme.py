"""Colour palette and widget styles for the application's look."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

# Corner radii: (top_left, top_right, bottom_right, bottom_left).
Radius = Tuple[float, float, float, float]

_NO_RADIUS: Radius = (0.0, 0.0, 0.0, 0.0)


@dataclass(frozen=True)
class Color:
    """An 8-bit RGB colour with a floating-point alpha in 0..1."""

    r: int
    g: int
    b: int
    a: float = 1.0

    def __post_init__(self) -> None:
        for channel in (self.r, self.g, self.b):
            if not 0 <= channel <= 255:
                raise ValueError(f"colour channel out of range: {channel}")
        if not 0.0 <= self.a <= 1.0:
            raise ValueError(f"alpha out of range: {self.a}")

    def with_alpha(self, alpha: float) -> "Color":
        """The same colour with a different alpha."""
        return replace(self, a=alpha)


def color(value: int) -> Color:
    """Opaque colour from a 0xRRGGBB integer."""
    if not 0 <= value <= 0xFFFFFF:
        raise ValueError(f"not a 24-bit colour: {value:#x}")
    return Color((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)


def rgba8(r: int, g: int, b: int, a: float) -> Color:
    """Colour from 8-bit channels and a 0..1 alpha."""
    return Color(r, g, b, a)


TRANSPARENT = Color(0, 0, 0, 0.0)
WHITE = Color(255, 255, 255)

BG = color(0x2B292D)
BG_SECONDARY = color(0x242226)
TEXT = color(0xFECDB2)
TEXT_DIM = color(0xAB8A79)
ACCENT = color(0xF6B6C9)
ACCENT_DIM = color(0x7D6E76)
BORDER = color(0x4F474D)
DANGER = color(0xE06B75)
WARNING = color(0xFFA07A)
SUCCESS = color(0xB1B695)
HUD_BG = rgba8(0x24, 0x22, 0x26, 0.75)
HUD_BORDER = rgba8(0x4F, 0x47, 0x4D, 0.5)
HUD_TEXT = rgba8(0xFE, 0xCD, 0xB2, 0.9)

_CLOSE_PRESSED = color(0xAA4444)


class ButtonStatus(enum.Enum):
    ACTIVE = "active"
    HOVERED = "hovered"
    PRESSED = "pressed"
    DISABLED = "disabled"


class PickListStatus(enum.Enum):
    ACTIVE = "active"
    HOVERED = "hovered"
    OPENED = "opened"


@dataclass(frozen=True)
class Border:
    radius: Radius = _NO_RADIUS
    width: float = 0.0
    color: Color = TRANSPARENT


@dataclass(frozen=True)
class ButtonStyle:
    background: Optional[Color]
    text_color: Color
    border: Border


@dataclass(frozen=True)
class ContainerStyle:
    text_color: Optional[Color]
    background: Optional[Color]
    border: Border = field(default_factory=Border)


@dataclass(frozen=True)
class RuleStyle:
    color: Color
    radius: Radius = _NO_RADIUS
    fill_mode: str = "full"


@dataclass(frozen=True)
class PickListStyle:
    text_color: Color
    placeholder_color: Color
    handle_color: Color
    background: Color
    border: Border


@dataclass(frozen=True)
class ThemePalette:
    name: str
    background: Color
    text: Color
    primary: Color
    success: Color
    warning: Color
    danger: Color


_THEME = ThemePalette(
    name="Cocuyo",
    background=BG,
    text=TEXT,
    primary=ACCENT,
    success=SUCCESS,
    warning=WARNING,
    danger=DANGER,
)


def create_theme() -> ThemePalette:
    """The application's custom theme palette."""
    return _THEME


def _rounded_border(border_color: Color, radius: float) -> Border:
    return Border(radius=(radius,) * 4, width=1.0, color=border_color)


def _top(radius: float) -> Radius:
    return (radius, radius, 0.0, 0.0)


def _bottom(radius: float) -> Radius:
    return (0.0, 0.0, radius, radius)


def _button(background: Color, text: Color, border: Color, radius: float) -> ButtonStyle:
    return ButtonStyle(background, text, _rounded_border(border, radius))


def styled_button(status: ButtonStatus) -> ButtonStyle:
    """Default button: accent on hover, dim accent while pressed."""
    match status:
        case ButtonStatus.ACTIVE:
            return _button(BG_SECONDARY, TEXT, BORDER, 6.0)
        case ButtonStatus.HOVERED:
            return _button(ACCENT, BG, ACCENT, 6.0)
        case ButtonStatus.PRESSED:
            return _button(ACCENT_DIM, BG, ACCENT, 6.0)
        case ButtonStatus.DISABLED:
            return _button(BG_SECONDARY, ACCENT_DIM, BORDER, 6.0)
    raise ValueError(f"unknown button status: {status!r}")


def close_button(status: ButtonStatus) -> ButtonStyle:
    """Window close button: danger colours on hover and press."""
    match status:
        case ButtonStatus.ACTIVE:
            return _button(BG_SECONDARY, TEXT, BORDER, 6.0)
        case ButtonStatus.HOVERED:
            return _button(DANGER, BG, DANGER, 6.0)
        case ButtonStatus.PRESSED:
            return _button(_CLOSE_PRESSED, BG, DANGER, 6.0)
        case ButtonStatus.DISABLED:
            return _button(BG_SECONDARY, ACCENT_DIM, BORDER, 6.0)
    raise ValueError(f"unknown button status: {status!r}")


def title_bar_container() -> ContainerStyle:
    return ContainerStyle(TEXT, BG_SECONDARY, Border(radius=_top(7.0)))


def window_border_container() -> ContainerStyle:
    return ContainerStyle(TEXT, BG, _rounded_border(BORDER, 8.0))


def styled_container() -> ContainerStyle:
    return ContainerStyle(TEXT, BG, Border(radius=_bottom(7.0)))


def menu_bar_container() -> ContainerStyle:
    return ContainerStyle(TEXT, BG_SECONDARY, Border())


def status_bar_container() -> ContainerStyle:
    return ContainerStyle(TEXT, BG_SECONDARY, Border(radius=_bottom(7.0)))


def styled_rule() -> RuleStyle:
    return RuleStyle(color=BORDER)


def styled_pick_list(status: PickListStatus) -> PickListStyle:
    """Pick list whose border lights up when hovered or open."""
    border_color = BORDER if status is PickListStatus.ACTIVE else ACCENT
    return PickListStyle(
        text_color=TEXT,
        placeholder_color=ACCENT_DIM,
        handle_color=TEXT,
        background=BG_SECONDARY,
        border=_rounded_border(border_color, 6.0),
    )


def styled_tooltip() -> ContainerStyle:
    return ContainerStyle(TEXT, BG_SECONDARY, _rounded_border(BORDER, 6.0))


def picker_item(status: ButtonStatus) -> ButtonStyle:
    """Unselected entry in the capture target list."""
    match status:
        case ButtonStatus.ACTIVE:
            return _button(TRANSPARENT, TEXT, TRANSPARENT, 4.0)
        case ButtonStatus.HOVERED:
            return _button(BG_SECONDARY, TEXT, BORDER, 4.0)
        case ButtonStatus.PRESSED:
            return _button(ACCENT_DIM, BG, ACCENT, 4.0)
        case ButtonStatus.DISABLED:
            return _button(TRANSPARENT, ACCENT_DIM, TRANSPARENT, 4.0)
    raise ValueError(f"unknown button status: {status!r}")


def picker_item_selected(status: ButtonStatus) -> ButtonStyle:
    """Selected entry in the capture target list; the same in every state."""
    if not isinstance(status, ButtonStatus):
        raise ValueError(f"unknown button status: {status!r}")
    return _button(ACCENT_DIM, TEXT, ACCENT, 4.0)


def picker_tab(status: ButtonStatus) -> ButtonStyle:
    """Inactive tab of the capture picker."""
    match status:
        case ButtonStatus.ACTIVE:
            return _button(BG_SECONDARY, TEXT_DIM, BORDER, 6.0)
        case ButtonStatus.HOVERED:
            return _button(ACCENT, BG, ACCENT, 6.0)
        case ButtonStatus.PRESSED:
            return _button(ACCENT_DIM, BG, ACCENT, 6.0)
        case ButtonStatus.DISABLED:
            return _button(BG_SECONDARY, ACCENT_DIM, BORDER, 6.0)
    raise ValueError(f"unknown button status: {status!r}")


def picker_tab_active(status: ButtonStatus) -> ButtonStyle:
    """Currently shown tab of the capture picker."""
    if status is ButtonStatus.DISABLED:
        return _button(BG_SECONDARY, ACCENT_DIM, BORDER, 6.0)
    if not isinstance(status, ButtonStatus):
        raise ValueError(f"unknown button status: {status!r}")
    return _button(ACCENT, BG, ACCENT, 6.0)