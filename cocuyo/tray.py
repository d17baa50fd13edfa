"""System tray menu state, actions and icon."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field
from typing import Optional

TOOLTIP = "Cocuyo"
_ICON_COLOR = bytes((255, 191, 0, 255))


class TrayAction(enum.Enum):
    TOGGLE_WINDOW = "toggle_window"
    TOGGLE_AMBIENT = "toggle_ambient"
    EXIT = "exit"


class MouseButton(enum.Enum):
    LEFT = "left"
    RIGHT = "right"
    MIDDLE = "middle"


@dataclass
class TrayState:
    """Tray menu items and the mapping of tray events to actions."""

    toggle_window_id: str = "toggle_window"
    toggle_ambient_id: str = "toggle_ambient"
    exit_id: str = "exit"
    toggle_window_text: str = field(default="Hide", init=False)
    toggle_ambient_text: str = field(default="Start Ambient", init=False)
    exit_text: str = field(default="Exit", init=False)
    tooltip: str = field(default=TOOLTIP, init=False)

    def __post_init__(self) -> None:
        ids = {self.toggle_window_id, self.toggle_ambient_id, self.exit_id}
        if len(ids) != 3:
            raise ValueError("tray menu item ids must be distinct")

    @property
    def menu(self) -> list[Optional[tuple[str, str]]]:
        """Menu entries as (id, text) pairs; None marks a separator."""
        return [
            (self.toggle_window_id, self.toggle_window_text),
            (self.toggle_ambient_id, self.toggle_ambient_text),
            None,
            (self.exit_id, self.exit_text),
        ]

    def update_menu_text(self, main_visible: bool, ambient_active: bool) -> None:
        """Relabel the toggle items to match the current state."""
        self.toggle_window_text = "Hide" if main_visible else "Show"
        self.toggle_ambient_text = "Stop Ambient" if ambient_active else "Start Ambient"

    def action_for_menu(self, item_id: str) -> Optional[TrayAction]:
        """Action for a clicked menu item, or None for an unknown item."""
        return {
            self.toggle_window_id: TrayAction.TOGGLE_WINDOW,
            self.toggle_ambient_id: TrayAction.TOGGLE_AMBIENT,
            self.exit_id: TrayAction.EXIT,
        }.get(item_id)

    def action_for_click(self, button: MouseButton) -> Optional[TrayAction]:
        """A left click on the icon toggles the window; other buttons do nothing."""
        return TrayAction.TOGGLE_WINDOW if button is MouseButton.LEFT else None


def generate_icon(size: int = 32) -> bytes:
    """RGBA pixels of a filled amber disc on a transparent square."""
    if size < 1:
        raise ValueError(f"icon size must be positive, got {size}")
    center = size / 2.0
    radius = center - 1.0
    transparent = bytes(4)
    return b"".join(
        _ICON_COLOR if math.hypot(x - center, y - center) <= radius else transparent
        for y in range(size)
        for x in range(size)
    )