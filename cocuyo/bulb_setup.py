"""State of the bulb discovery and selection screen."""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace
from typing import Iterable, Optional

DEFAULT_BULB_NAME = "WiZ Bulb"


@dataclass(frozen=True)
class BulbInfo:
    """A bulb found on the network, identified by its MAC address."""

    mac: str
    ip: str
    name: Optional[str] = None

    @property
    def label(self) -> str:
        """Display name, falling back to a generic one."""
        return self.name if self.name is not None else DEFAULT_BULB_NAME

    @property
    def detail(self) -> str:
        """Address line shown next to the label."""
        return f"{self.ip} - {self.mac}"


class BulbSetupEvent(enum.Enum):
    DONE = "done"
    SELECTION_CHANGED = "selection_changed"
    BULBS_DISCOVERED = "bulbs_discovered"


class BulbSetupState:
    """Known bulbs, the user's selection among them and the scan status."""

    def __init__(
        self, saved_bulbs: Iterable[BulbInfo], selected_macs: Iterable[str]
    ) -> None:
        self._bulbs: list[BulbInfo] = list(saved_bulbs)
        known = {bulb.mac for bulb in self._bulbs}
        # Selections for bulbs that are no longer known are dropped.
        self._selected: set[str] = {mac for mac in selected_macs if mac in known}
        self._scanning = False

    @property
    def discovered_bulbs(self) -> list[BulbInfo]:
        return list(self._bulbs)

    @property
    def selected_bulbs(self) -> frozenset[str]:
        return frozenset(self._selected)

    @property
    def is_scanning(self) -> bool:
        return self._scanning

    def begin_scan(self) -> None:
        """Mark a network scan as running."""
        self._scanning = True

    def bulbs_discovered(self, new_bulbs: Iterable[BulbInfo]) -> BulbSetupEvent:
        """Merge scan results: known bulbs get the new address (and name, if any)."""
        self._scanning = False
        positions = {bulb.mac: i for i, bulb in enumerate(self._bulbs)}
        for found in new_bulbs:
            position = positions.get(found.mac)
            if position is None:
                positions[found.mac] = len(self._bulbs)
                self._bulbs.append(found)
                continue
            existing = self._bulbs[position]
            name = found.name if found.name is not None else existing.name
            self._bulbs[position] = replace(existing, ip=found.ip, name=name)
        return BulbSetupEvent.BULBS_DISCOVERED

    def toggle_bulb(self, mac: str) -> BulbSetupEvent:
        """Select the bulb if it is unselected, otherwise unselect it."""
        if mac in self._selected:
            self._selected.remove(mac)
        else:
            self._selected.add(mac)
        return BulbSetupEvent.SELECTION_CHANGED

    def done(self) -> BulbSetupEvent:
        return BulbSetupEvent.DONE

    def has_selected_bulbs(self) -> bool:
        return bool(self._selected)

    def selected_bulb_infos(self) -> list[BulbInfo]:
        """Selected bulbs in discovery order."""
        return [bulb for bulb in self._bulbs if bulb.mac in self._selected]

    def status_text(self) -> str:
        if self._scanning:
            return "Scanning..."
        count = len(self._selected)
        return f"{count} bulb{'' if count == 1 else 's'} selected"

    @property
    def placeholder_text(self) -> str:
        """Text shown in place of the list when no bulbs are known."""
        if self._scanning:
            return "Scanning for bulbs..."
        return "No bulbs found. Press Scan to discover."


__all__ = ["BulbInfo", "BulbSetupEvent", "BulbSetupState", "DEFAULT_BULB_NAME"]