# routers/window_routes.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from schemas.window import DesktopOut, FlashOut, PositionIn, SizeIn, WindowOut
from services.desktop.state import get_window_manager
from services.desktop.window_manager import Position, Size, WindowId, WindowManager

router = APIRouter()


def _desktop_out(manager: WindowManager) -> DesktopOut:
    return DesktopOut(
        windows=[WindowOut.model_validate(rec) for rec in manager.windows()],
        highest_z_index=manager.highest_z_index,
        flashing_window=manager.flashing_window,
    )


def _window_out(manager: WindowManager, window_id: WindowId) -> WindowOut:
    return WindowOut.model_validate(manager.get(window_id))


@router.get("", response_model=DesktopOut)
async def get_desktop(manager: WindowManager = Depends(get_window_manager)):
    return _desktop_out(manager)


@router.get("/visible", response_model=List[WindowOut])
async def get_visible_windows(manager: WindowManager = Depends(get_window_manager)):
    """Open, non-minimized windows in paint order (back to front)."""
    return [WindowOut.model_validate(rec) for rec in manager.visible_windows()]


# ─── Flash slot ──────────────────────────────────────────────────
# Declared before /{window_id} routes so "flash" is never parsed as an id.

@router.get("/flash", response_model=FlashOut)
async def peek_flash(manager: WindowManager = Depends(get_window_manager)):
    return FlashOut(flashing_window=manager.flashing_window)


@router.post("/flash/consume", response_model=FlashOut)
async def consume_flash(manager: WindowManager = Depends(get_window_manager)):
    return FlashOut(flashing_window=manager.consume_flash())


@router.delete("/flash", response_model=FlashOut)
async def clear_flash(manager: WindowManager = Depends(get_window_manager)):
    manager.clear_flash()
    return FlashOut(flashing_window=None)


# ─── Lifecycle ───────────────────────────────────────────────────

@router.get("/{window_id}", response_model=WindowOut)
async def get_window(window_id: WindowId, manager: WindowManager = Depends(get_window_manager)):
    return _window_out(manager, window_id)


@router.post("/{window_id}/open", response_model=WindowOut)
async def open_window(window_id: WindowId, manager: WindowManager = Depends(get_window_manager)):
    manager.open(window_id)
    return _window_out(manager, window_id)


@router.post("/{window_id}/close", response_model=WindowOut)
async def close_window(window_id: WindowId, manager: WindowManager = Depends(get_window_manager)):
    manager.close(window_id)
    return _window_out(manager, window_id)


@router.post("/{window_id}/minimize", response_model=WindowOut)
async def minimize_window(window_id: WindowId, manager: WindowManager = Depends(get_window_manager)):
    manager.minimize(window_id)
    return _window_out(manager, window_id)


@router.post("/{window_id}/restore", response_model=WindowOut)
async def restore_window(window_id: WindowId, manager: WindowManager = Depends(get_window_manager)):
    manager.restore(window_id)
    return _window_out(manager, window_id)


@router.post("/{window_id}/focus", response_model=WindowOut)
async def focus_window(window_id: WindowId, manager: WindowManager = Depends(get_window_manager)):
    manager.bring_to_front(window_id)
    return _window_out(manager, window_id)


@router.post("/{window_id}/activate", response_model=WindowOut)
async def activate_window(window_id: WindowId, manager: WindowManager = Depends(get_window_manager)):
    """Dock click."""
    manager.activate(window_id)
    return _window_out(manager, window_id)


@router.post("/{window_id}/summon", response_model=DesktopOut)
async def summon_window(window_id: WindowId, manager: WindowManager = Depends(get_window_manager)):
    manager.summon(window_id)
    return _desktop_out(manager)


@router.post("/{window_id}/flash", response_model=FlashOut)
async def flash_window(window_id: WindowId, manager: WindowManager = Depends(get_window_manager)):
    manager.flash(window_id)
    return FlashOut(flashing_window=manager.flashing_window)


# ─── Geometry ────────────────────────────────────────────────────

@router.put("/{window_id}/position", response_model=WindowOut)
async def update_window_position(
    window_id: WindowId,
    payload: PositionIn,
    manager: WindowManager = Depends(get_window_manager),
):
    manager.update_position(window_id, Position(payload.x, payload.y))
    return _window_out(manager, window_id)


@router.put("/{window_id}/size", response_model=WindowOut)
async def update_window_size(
    window_id: WindowId,
    payload: SizeIn,
    manager: WindowManager = Depends(get_window_manager),
):
    manager.update_size(window_id, Size(payload.width, payload.height))
    return _window_out(manager, window_id)
