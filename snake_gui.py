# Tkinter window that plays Snake: keyboard input, fixed-interval ticks, board drawing.
from __future__ import annotations

import logging
import time
import tkinter as tk

# Support both package imports and running this file directly.
try:
    from .game_logic import Direction, GameConfig, SnakeGame
    from .render import DisplayConfig, MoveTimer, board_layout, cell_rect, snake_colors, to_hex
except ImportError:
    from game_logic import Direction, GameConfig, SnakeGame
    from render import DisplayConfig, MoveTimer, board_layout, cell_rect, snake_colors, to_hex


logger = logging.getLogger(__name__)

KEY_DIRECTIONS = {
    "Up": Direction.UP,
    "Down": Direction.DOWN,
    "Left": Direction.LEFT,
    "Right": Direction.RIGHT,
    "w": Direction.UP,
    "s": Direction.DOWN,
    "a": Direction.LEFT,
    "d": Direction.RIGHT,
}
# Caps Lock or Shift produce the uppercase keysym.
KEY_DIRECTIONS.update({key.upper(): d for key, d in KEY_DIRECTIONS.items() if len(key) == 1})


def accept_input(game: SnakeGame, direction: Direction, paused: bool) -> bool:
    """Queue a key press unless the game is paused."""
    if paused:
        return False
    return game.queue_direction(direction)


class SnakeApp:
    """Tkinter presentation layer for SnakeGame."""
    STATUS_HEIGHT = 24

    def __init__(self, root: tk.Tk, config: GameConfig, display: DisplayConfig | None = None) -> None:
        self.root = root
        self.config = config
        self.display = display if display is not None else DisplayConfig()
        self.game = SnakeGame(config)
        self.paused = False
        self.after_id: str | None = None  # Tkinter timer id for the frame loop
        self.move_timer = MoveTimer(config.move_interval)
        self.previous_time = time.perf_counter()

        self.root.title("Snake")
        self.root.geometry(f"{self.display.screen_width}x{self.display.screen_height + self.STATUS_HEIGHT}")
        self.root.resizable(True, True)
        self.root.configure(bg=to_hex(self.display.background))

        self._build_layout()
        self._bind_keys()
        self.root.protocol("WM_DELETE_WINDOW", self.close)
        self.draw()

    def _build_layout(self) -> None:
        """Canvas fills the window; a one-line status bar sits underneath."""
        self.root.columnconfigure(0, weight=1)
        self.root.rowconfigure(0, weight=1)

        self.canvas = tk.Canvas(
            self.root,
            bg=to_hex(self.display.background),
            highlightthickness=0,
            bd=0,
        )
        self.canvas.grid(row=0, column=0, sticky="nsew")
        self.canvas.bind("<Configure>", lambda _e: self.draw())

        self.status_var = tk.StringVar(value="")
        tk.Label(
            self.root,
            textvariable=self.status_var,
            fg=to_hex(self.display.text_color),
            bg=to_hex(self.display.background),
            font=("Helvetica", 11),
            anchor="w",
        ).grid(row=1, column=0, sticky="ew", padx=8)

    def _bind_keys(self) -> None:
        """Arrow keys / WASD queue a turn, Space pauses, Escape quits."""
        for key, direction in KEY_DIRECTIONS.items():
            self.root.bind(f"<{key}>", lambda _e, d=direction: self.on_direction(d))
        self.root.bind("<space>", lambda _e: self.toggle_pause())
        self.root.bind("<Escape>", lambda _e: self.close())

    def on_direction(self, direction: Direction) -> None:
        if not accept_input(self.game, direction, self.paused):
            logger.debug("Ignored input %s (queue: %s)", direction.value, list(self.game.direction_queue))

    def start(self) -> None:
        """Begin the frame loop from the current state."""
        self.previous_time = time.perf_counter()
        self.move_timer.restart()
        self.frame()

    def toggle_pause(self) -> None:
        """Pause/resume without losing current board state."""
        self.paused = not self.paused
        # Time spent paused must not count towards the next tick.
        self.previous_time = time.perf_counter()
        self.draw()

    def frame(self) -> None:
        """One rendered frame; ticks the game whenever a full move interval has elapsed."""
        now = time.perf_counter()
        elapsed = now - self.previous_time
        self.previous_time = now

        if self.move_timer.advance(elapsed, paused=self.paused):
            self.game.tick()

        self.draw()
        self.after_id = self.root.after(self.display.frame_ms, self.frame)

    def close(self) -> None:
        if self.after_id is not None:
            self.root.after_cancel(self.after_id)
            self.after_id = None
        self.root.destroy()

    def draw(self) -> None:
        """Render border, apple, gradient snake and the status line."""
        self.canvas.delete("all")
        display = self.display
        border = display.border_thickness
        layout = board_layout(
            self.game.width,
            self.game.height,
            max(self.canvas.winfo_width(), 1),
            max(self.canvas.winfo_height(), 1),
            border,
        )

        # Board background plus its outline, drawn just outside the playing area.
        self.canvas.create_rectangle(
            layout.x_off - border,
            layout.y_off - border,
            layout.x_off + layout.board_w + border,
            layout.y_off + layout.board_h + border,
            fill=to_hex(display.board_bg),
            outline=to_hex(display.border_color),
            width=border,
        )

        if self.game.apple is not None:
            self.canvas.create_rectangle(
                *cell_rect(layout, *self.game.apple), fill=to_hex(display.apple_color), outline=""
            )

        colors = snake_colors(display.snake_head_color, len(self.game.snake))
        for (x, y), color in zip(self.game.snake, colors):
            self.canvas.create_rectangle(*cell_rect(layout, x, y), fill=to_hex(color), outline="")

        state = "Paused" if self.paused else "Running"
        self.status_var.set(
            f"Length: {len(self.game.snake)}    Best: {self.game.best_length}    "
            f"Deaths: {self.game.deaths}    {state}    (Space: pause, Esc: quit)"
        )


def run_player_gui(config: GameConfig | None = None, display: DisplayConfig | None = None) -> None:
    """Launch the Snake window and block until it is closed."""
    root = tk.Tk()
    app = SnakeApp(root, config if config is not None else GameConfig(), display)
    app.start()
    root.mainloop()


if __name__ == "__main__":
    run_player_gui()
