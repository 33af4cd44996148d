import pygame

CONFIG = {
    # Tick speed: interval = max(FLOOR, BASE - level * STEP)
    "TICK_BASE_MS": 1000,
    "TICK_STEP_MS": 100,
    "TICK_FLOOR_MS": 100,

    # Key bindings (one code per action)
    "KEY_CONFIRM": pygame.K_RETURN,
    "KEY_LEFT": pygame.K_LEFT,
    "KEY_UP": pygame.K_UP,
    "KEY_RIGHT": pygame.K_RIGHT,
    "KEY_DOWN": pygame.K_DOWN,

    # Host window
    "WINDOW_SIZE": (480, 640),
    "FPS": 60,

    "LOG_LEVEL": "INFO",
}
