from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from services.desktop.window_manager import WindowId


class PositionIn(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    x: int
    y: int


class SizeIn(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    width: int
    height: int


class WindowOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: WindowId
    title: str
    icon: str
    is_open: bool
    is_minimized: bool
    position: PositionIn
    size: SizeIn
    z_index: int


class DesktopOut(BaseModel):
    windows: List[WindowOut]
    highest_z_index: int
    flashing_window: Optional[WindowId] = None


class FlashOut(BaseModel):
    flashing_window: Optional[WindowId] = None
