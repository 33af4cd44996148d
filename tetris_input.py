"""Key code -> controller action mapping"""
from enum import Enum
from typing import Optional
from tetris_config import CONFIG


class Key(Enum):
    CONFIRM = "KEY_CONFIRM"
    LEFT = "KEY_LEFT"
    UP = "KEY_UP"
    RIGHT = "KEY_RIGHT"
    DOWN = "KEY_DOWN"


def key_action(code) -> Optional[Key]:
    """Return the action bound to ``code``, or None for unbound keys.

    Bindings are read from CONFIG on every call so rebinding applies at once.
    """
    for k in Key:
        if CONFIG[k.value] == code:
            return k
    return None
