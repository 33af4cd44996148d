import itertools

import pygame
import pytest

from tetris_config import CONFIG
from tetris_controller import LoopController


class FakeGame:
    def __init__(self, level=0):
        self.state = {"is_game_over": False, "level": level, "score": 0}
        self.calls = []

    def get_state(self):
        return dict(self.state)

    def move_piece_down(self):
        self.calls.append("down")

    def move_piece_left(self):
        self.calls.append("left")

    def move_piece_right(self):
        self.calls.append("right")

    def rotate_piece(self):
        self.calls.append("rotate")

    def reset(self):
        self.calls.append("reset")
        self.state.update(is_game_over=False, level=0, score=0)


class RecordingView:
    def __init__(self):
        self.calls = []

    def render_start_screen(self):
        self.calls.append(("start", None))

    def render_main_screen(self, state):
        self.calls.append(("main", state))

    def render_pause_screen(self):
        self.calls.append(("pause", None))

    def render_end_screen(self, state):
        self.calls.append(("end", state))

    @property
    def screens(self):
        return [name for name, _ in self.calls]


class FakeInput:
    def __init__(self):
        self.handlers = {}

    def subscribe(self, kind, handler):
        self.handlers.setdefault(kind, []).append(handler)

    def press(self, key):
        for h in self.handlers.get(pygame.KEYDOWN, []):
            h(pygame.event.Event(pygame.KEYDOWN, key=key))

    def release(self, key):
        for h in self.handlers.get(pygame.KEYUP, []):
            h(pygame.event.Event(pygame.KEYUP, key=key))


class FakeScheduler:
    def __init__(self):
        self._ids = itertools.count(1)
        self.active = {}
        self.armed = []      # every interval ever requested

    def set_interval(self, callback, interval_ms):
        handle = next(self._ids)
        self.active[handle] = callback
        self.armed.append(interval_ms)
        return handle

    def clear_interval(self, handle):
        del self.active[handle]

    def fire(self):
        for cb in list(self.active.values()):
            cb()


@pytest.fixture(autouse=True)
def restore_config():
    saved = dict(CONFIG)
    yield
    CONFIG.clear()
    CONFIG.update(saved)


@pytest.fixture()
def game():
    return FakeGame()


@pytest.fixture()
def view():
    return RecordingView()


@pytest.fixture()
def keys():
    return FakeInput()


@pytest.fixture()
def scheduler():
    return FakeScheduler()


@pytest.fixture()
def controller(game, view, keys, scheduler):
    return LoopController(game, view, keys, scheduler)
