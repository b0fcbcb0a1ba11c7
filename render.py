# Board geometry and colour maths used by the Tkinter view (no widgets here).
from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

RGB = tuple[int, int, int]


@dataclass(frozen=True)
class DisplayConfig:
    """Window and palette settings for the game view."""
    screen_width: int = 800
    screen_height: int = 450
    border_thickness: int = 2
    fps: int = 60
    background: RGB = (245, 245, 245)
    board_bg: RGB = (160, 255, 112)
    border_color: RGB = (0, 0, 0)
    apple_color: RGB = (230, 41, 55)
    snake_head_color: RGB = (71, 130, 255)
    text_color: RGB = (80, 80, 80)

    @property
    def frame_ms(self) -> int:
        return max(1, round(1000 / self.fps))


class BoardLayout(NamedTuple):
    cell: int
    x_off: int
    y_off: int
    board_w: int
    board_h: int


def cell_size(grid_w: int, grid_h: int, screen_w: int, screen_h: int, border: int) -> int:
    """Largest integer tile size that fits the grid plus its border in the window."""
    cell_w = (screen_w - border * 2) // grid_w
    cell_h = (screen_h - border * 2) // grid_h
    return max(1, min(cell_w, cell_h))


def board_layout(grid_w: int, grid_h: int, screen_w: int, screen_h: int, border: int) -> BoardLayout:
    """Tile size plus the offsets that centre the board in the window."""
    cell = cell_size(grid_w, grid_h, screen_w, screen_h, border)
    board_w = cell * grid_w
    board_h = cell * grid_h
    x_off = (screen_w - board_w) // 2
    y_off = (screen_h - board_h) // 2
    return BoardLayout(cell, x_off, y_off, board_w, board_h)


def cell_rect(layout: BoardLayout, x: int, y: int) -> tuple[int, int, int, int]:
    x1 = layout.x_off + x * layout.cell
    y1 = layout.y_off + y * layout.cell
    return x1, y1, x1 + layout.cell, y1 + layout.cell


def gradient_color(head: RGB, index: int, length: int) -> RGB:
    """
    Fade the head colour towards black along the body:
    segment i of n is scaled by (n - i) * 255 // n.
    """
    factor = (length - index) * 255 // length
    r, g, b = head
    return r * factor // 255, g * factor // 255, b * factor // 255


def snake_colors(head: RGB, length: int) -> list[RGB]:
    return [gradient_color(head, i, length) for i in range(length)]


def to_hex(color: RGB) -> str:
    """Tk colour string such as #4782ff."""
    for channel in color:
        if not (0 <= channel <= 255):
            raise ValueError(f"Colour channel out of range: {color}")
    return "#{:02x}{:02x}{:02x}".format(*color)


class MoveTimer:
    """Accumulates frame time and reports when the snake is due to move."""

    def __init__(self, interval: float) -> None:
        if interval <= 0:
            raise ValueError("interval must be > 0")
        self.interval = interval
        self.elapsed = 0.0

    def advance(self, dt: float, paused: bool = False) -> bool:
        """Add one frame's time; True means tick now. Leftover time is dropped."""
        if paused:
            return False
        self.elapsed += dt
        if self.elapsed >= self.interval:
            self.elapsed = 0.0
            return True
        return False

    def restart(self) -> None:
        self.elapsed = 0.0
