"""Host entry: window, event pump and the loop controller wired together."""
import argparse
import importlib
import logging

import pygame
from tetris_config import CONFIG
from tetris_events import EventHub
from tetris_controller import LoopController

log = logging.getLogger("tetris")


def load_object(path):
    """Resolve "package.module:attr" to the named object."""
    module_name, sep, attr = path.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(f"expected 'module:attr', got {path!r}")
    obj = importlib.import_module(module_name)
    for part in attr.split("."):
        obj = getattr(obj, part)
    return obj


def open_window(size, flags=pygame.DOUBLEBUF):
    try:
        return pygame.display.set_mode(size, flags, vsync=1)
    except TypeError:
        return pygame.display.set_mode(size, flags)


def run(game_factory, view_factory):
    pygame.init()
    hub = EventHub()
    controller = None
    try:
        screen = open_window(CONFIG["WINDOW_SIZE"])
        pygame.display.set_caption("Tetris")
        clock = pygame.time.Clock()

        game = game_factory()
        view = view_factory(screen)
        controller = LoopController(game, view, hub, hub)
        log.info("loop started")
        while hub.pump():
            pygame.display.flip()
            clock.tick(CONFIG["FPS"])
    finally:
        if controller is not None:
            controller.close()
        hub.close()
        pygame.quit()
        log.info("loop stopped")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Run the falling-block game loop.")
    parser.add_argument("--game", required=True, help="Game factory, as module:attr")
    parser.add_argument("--view", required=True, help="View factory taking the screen surface, as module:attr")
    parser.add_argument("--log-level", default=CONFIG["LOG_LEVEL"])
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    try:
        run(load_object(args.game), load_object(args.view))
    except Exception:
        log.exception("game loop crashed")
        raise
