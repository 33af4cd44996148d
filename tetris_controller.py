"""
Loop controller: decides when the game advances and which screen is shown.

The controller owns no game rules and draws nothing. It reads state snapshots
from a Game, tells it to move/rotate/reset, and picks exactly one View render
per refresh (a refresh never changes the run state):

  • snapshot says game over  -> end screen
  • not running              -> pause screen
  • running                  -> main screen

Automatic descent is a repeating timer whose interval is fixed when the timer
is armed (see tick_interval_ms); a level change only applies on the next arm.

Controls:

  • Enter : start / pause / resume, restart after game over
  • Left / Right : move (running only; game over is the Game's concern)
  • Up    : rotate (running only)
  • Down  : soft drop; auto-tick is suspended while held
"""
from __future__ import annotations
import logging
from enum import Enum
from typing import Any, Callable, Mapping, Protocol

import pygame

from tetris_config import CONFIG
from tetris_input import Key, key_action

log = logging.getLogger(__name__)

State = Mapping[str, Any]


class Game(Protocol):
    def get_state(self) -> State: ...
    def move_piece_down(self) -> None: ...
    def move_piece_left(self) -> None: ...
    def move_piece_right(self) -> None: ...
    def rotate_piece(self) -> None: ...
    def reset(self) -> None: ...


class View(Protocol):
    def render_start_screen(self) -> None: ...
    def render_main_screen(self, state: State) -> None: ...
    def render_pause_screen(self) -> None: ...
    def render_end_screen(self, state: State) -> None: ...


class InputSource(Protocol):
    def subscribe(self, kind: int, handler: Callable) -> None: ...


class Scheduler(Protocol):
    def set_interval(self, callback: Callable[[], None], interval_ms: int) -> Any: ...
    def clear_interval(self, handle: Any) -> None: ...


class LoopState(Enum):
    IDLE = "idle"          # constructed, start screen shown
    RUNNING = "running"
    PAUSED = "paused"


def tick_interval_ms(level: int) -> int:
    """Milliseconds between automatic descents at ``level``."""
    base, step = CONFIG["TICK_BASE_MS"], CONFIG["TICK_STEP_MS"]
    return max(CONFIG["TICK_FLOOR_MS"], base - level * step)


class LoopController:
    def __init__(self, game: Game, view: View, input_source: InputSource, scheduler: Scheduler):
        self.game = game
        self.view = view
        self.input_source = input_source
        self.scheduler = scheduler
        self.state = LoopState.IDLE
        self._timer = None

        input_source.subscribe(pygame.KEYDOWN, self.on_key_pressed)
        input_source.subscribe(pygame.KEYUP, self.on_key_released)

        self.view.render_start_screen()

    @property
    def running(self) -> bool:
        return self.state is LoopState.RUNNING

    @property
    def timer_active(self) -> bool:
        return self._timer is not None

    def _transition(self, new: LoopState):
        if new is not self.state:
            log.debug("%s -> %s", self.state.value, new.value)
            self.state = new

    # ---------- Tick & view ----------
    def advance_tick(self):
        self.game.move_piece_down()
        self.refresh_view()

    def refresh_view(self):
        state = self.game.get_state()
        if state["is_game_over"]:
            self.view.render_end_screen(state)
        elif not self.running:
            self.view.render_pause_screen()
        else:
            self.view.render_main_screen(state)

    # ---------- Timer ----------
    def start_timer(self):
        interval = tick_interval_ms(self.game.get_state()["level"])
        if self._timer is None:
            self._timer = self.scheduler.set_interval(self.advance_tick, interval)
            log.debug("tick every %d ms", interval)

    def stop_timer(self):
        if self._timer is not None:
            self.scheduler.clear_interval(self._timer)
            self._timer = None
            log.debug("tick stopped")

    # ---------- Run state ----------
    def play(self):
        self._transition(LoopState.RUNNING)
        self.start_timer()
        self.refresh_view()

    def pause(self):
        self._transition(LoopState.PAUSED)
        self.stop_timer()
        self.refresh_view()

    def reset(self):
        log.info("game reset")
        self.game.reset()
        self.play()

    def close(self):
        """Stop ticking and detach from the input source if it allows it."""
        self.stop_timer()
        unsubscribe = getattr(self.input_source, "unsubscribe", None)
        if unsubscribe is not None:
            unsubscribe(pygame.KEYDOWN, self.on_key_pressed)
            unsubscribe(pygame.KEYUP, self.on_key_released)

    # ---------- Input ----------
    def on_key_pressed(self, event):
        action = key_action(event.key)
        if action is None:
            return
        if action is Key.CONFIRM:
            if self.game.get_state()["is_game_over"]:
                self.reset()
            elif self.running:
                self.pause()
            else:
                self.play()
            return
        if not self.running:
            return
        if action is Key.LEFT:
            self.game.move_piece_left()
        elif action is Key.UP:
            self.game.rotate_piece()
        elif action is Key.RIGHT:
            self.game.move_piece_right()
        elif action is Key.DOWN:
            # Soft drop: no auto-tick until the key is released
            self.stop_timer()
            self.game.move_piece_down()
        self.refresh_view()

    def on_key_released(self, event):
        if key_action(event.key) is Key.DOWN and self.running:
            self.start_timer()
