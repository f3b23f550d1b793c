# services/desktop/window_manager.py
"""
Window lifecycle for the simulated desktop.

Each window kind has exactly one record, created when the manager is built.
Stacking uses a single counter owned by the manager: every call that brings
a window forward takes the next value, so z_index gives a strict back-to-front
paint order for every window that has ever been focused.

State per window:
    Closed --open--> Open --minimize--> Minimized --restore--> Open
    Open/Minimized --close--> Closed
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, List, Optional, Union

logger = logging.getLogger(__name__)


class WindowId(str, Enum):
    WALLET = "wallet"
    SEND = "send"
    RECEIVE = "receive"
    SWAP = "swap"
    TRANSACTIONS = "transactions"
    NFTS = "nfts"


@dataclass(frozen=True)
class Position:
    x: int
    y: int


@dataclass(frozen=True)
class Size:
    width: int
    height: int


@dataclass
class WindowRecord:
    id: WindowId
    title: str
    icon: str
    is_open: bool
    is_minimized: bool
    position: Position
    size: Size
    z_index: int

    @property
    def is_visible(self) -> bool:
        return self.is_open and not self.is_minimized


# Starting layout: only the wallet is open.
DEFAULT_WINDOWS: Dict[WindowId, WindowRecord] = {
    WindowId.WALLET: WindowRecord(
        id=WindowId.WALLET, title="Wallet", icon="🏠",
        is_open=True, is_minimized=False,
        position=Position(80, 60), size=Size(380, 520), z_index=1,
    ),
    WindowId.SEND: WindowRecord(
        id=WindowId.SEND, title="Send", icon="↗️",
        is_open=False, is_minimized=False,
        position=Position(500, 100), size=Size(380, 400), z_index=0,
    ),
    WindowId.RECEIVE: WindowRecord(
        id=WindowId.RECEIVE, title="Receive", icon="↙️",
        is_open=False, is_minimized=False,
        position=Position(200, 150), size=Size(380, 450), z_index=0,
    ),
    WindowId.SWAP: WindowRecord(
        id=WindowId.SWAP, title="Swap", icon="🔄",
        is_open=False, is_minimized=False,
        position=Position(350, 80), size=Size(400, 500), z_index=0,
    ),
    WindowId.TRANSACTIONS: WindowRecord(
        id=WindowId.TRANSACTIONS, title="History", icon="📋",
        is_open=False, is_minimized=False,
        position=Position(600, 120), size=Size(420, 480), z_index=0,
    ),
    WindowId.NFTS: WindowRecord(
        id=WindowId.NFTS, title="NFTs", icon="🖼️",
        is_open=False, is_minimized=False,
        position=Position(150, 100), size=Size(500, 550), z_index=0,
    ),
}

DEFAULT_HIGHEST_Z_INDEX = 1

WindowKey = Union[WindowId, str]


def _window_id(value: WindowKey) -> WindowId:
    # WindowId("bogus") raises ValueError; the id set is closed.
    return value if isinstance(value, WindowId) else WindowId(value)


class WindowManager:
    def __init__(self) -> None:
        self._windows: Dict[WindowId, WindowRecord] = {
            wid: replace(rec) for wid, rec in DEFAULT_WINDOWS.items()
        }
        self._highest_z_index = DEFAULT_HIGHEST_Z_INDEX
        self._flashing: Optional[WindowId] = None

    # ─── Read access ─────────────────────────────────────────────

    @property
    def highest_z_index(self) -> int:
        return self._highest_z_index

    @property
    def flashing_window(self) -> Optional[WindowId]:
        return self._flashing

    def get(self, window_id: WindowKey) -> WindowRecord:
        return replace(self._windows[_window_id(window_id)])

    def windows(self) -> List[WindowRecord]:
        return [replace(rec) for rec in self._windows.values()]

    def visible_windows(self) -> List[WindowRecord]:
        """Open, non-minimized windows ordered back to front."""
        visible = [replace(rec) for rec in self._windows.values() if rec.is_visible]
        return sorted(visible, key=lambda rec: rec.z_index)

    # ─── Lifecycle ───────────────────────────────────────────────

    def _next_z_index(self) -> int:
        self._highest_z_index += 1
        return self._highest_z_index

    def open(self, window_id: WindowKey) -> None:
        rec = self._windows[_window_id(window_id)]
        rec.is_open = True
        rec.is_minimized = False
        rec.z_index = self._next_z_index()
        logger.debug("window_open id=%s z=%d", rec.id.value, rec.z_index)

    def close(self, window_id: WindowKey) -> None:
        rec = self._windows[_window_id(window_id)]
        rec.is_open = False
        rec.is_minimized = False
        logger.debug("window_close id=%s", rec.id.value)

    def minimize(self, window_id: WindowKey) -> None:
        rec = self._windows[_window_id(window_id)]
        if not rec.is_open:
            return
        rec.is_minimized = True
        logger.debug("window_minimize id=%s", rec.id.value)

    def restore(self, window_id: WindowKey) -> None:
        rec = self._windows[_window_id(window_id)]
        rec.is_minimized = False
        rec.z_index = self._next_z_index()
        logger.debug("window_restore id=%s z=%d", rec.id.value, rec.z_index)

    def bring_to_front(self, window_id: WindowKey) -> None:
        rec = self._windows[_window_id(window_id)]
        rec.z_index = self._next_z_index()

    def activate(self, window_id: WindowKey) -> None:
        """Dock click: open if closed, restore if minimized, else leave as is."""
        rec = self._windows[_window_id(window_id)]
        if not rec.is_open:
            self.open(rec.id)
        elif rec.is_minimized:
            self.restore(rec.id)

    def summon(self, window_id: WindowKey) -> None:
        """Make the window visible on top and flash it."""
        rec = self._windows[_window_id(window_id)]
        if rec.is_visible:
            self.bring_to_front(rec.id)
        else:
            self.open(rec.id)
        self.flash(rec.id)

    # ─── Geometry ────────────────────────────────────────────────

    def update_position(self, window_id: WindowKey, position: Position) -> None:
        self._windows[_window_id(window_id)].position = position

    def update_size(self, window_id: WindowKey, size: Size) -> None:
        self._windows[_window_id(window_id)].size = size

    # ─── Flash slot ──────────────────────────────────────────────

    def flash(self, window_id: WindowKey) -> None:
        self._flashing = _window_id(window_id)

    def clear_flash(self) -> None:
        self._flashing = None

    def consume_flash(self) -> Optional[WindowId]:
        pending = self._flashing
        self._flashing = None
        return pending
