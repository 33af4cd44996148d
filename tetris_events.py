"""
Host event hub on top of the pygame event queue.

Provides the two capabilities the loop controller is built against:

  • an input source: subscribe(kind, handler) for KEYDOWN / KEYUP
  • a repeating timer: set_interval(callback, ms) / clear_interval(handle)

Timers are pygame.time.set_timer registrations on custom event types; the
handle returned by set_interval is that event type. Each arming stamps its
events with a generation number, so ticks left over from an earlier arming of
a recycled type never reach the new callback. Everything runs on the thread
that calls pump(), one event at a time, in queue order.
"""
from __future__ import annotations
import itertools
import logging
from typing import Callable, Dict, List, Tuple

import pygame

log = logging.getLogger(__name__)

KEY_EVENT_KINDS = (pygame.KEYDOWN, pygame.KEYUP)


class EventHub:
    def __init__(self):
        self._handlers: Dict[int, List[Callable]] = {kind: [] for kind in KEY_EVENT_KINDS}
        # event type -> (callback, generation)
        self._timers: Dict[int, Tuple[Callable[[], None], int]] = {}
        self._generations = itertools.count(1)
        # Released custom event types, reused before allocating new ones
        self._free_types: List[int] = []

    # ---------- Input source ----------
    def subscribe(self, kind: int, handler: Callable) -> None:
        if kind not in self._handlers:
            raise ValueError(f"unsupported event kind: {pygame.event.event_name(kind)}")
        self._handlers[kind].append(handler)

    def unsubscribe(self, kind: int, handler: Callable) -> None:
        handlers = self._handlers.get(kind, [])
        if handler in handlers:
            handlers.remove(handler)

    # ---------- Repeating timer ----------
    def set_interval(self, callback: Callable[[], None], interval_ms: int) -> int:
        if isinstance(interval_ms, bool) or not isinstance(interval_ms, int) or interval_ms <= 0:
            raise ValueError(f"interval must be a positive int of milliseconds, got {interval_ms!r}")
        etype = self._free_types.pop() if self._free_types else pygame.event.custom_type()
        gen = next(self._generations)
        self._timers[etype] = (callback, gen)
        pygame.time.set_timer(pygame.event.Event(etype, gen=gen), interval_ms)
        log.debug("timer %d (gen %d) armed every %d ms", etype, gen, interval_ms)
        return etype

    def clear_interval(self, handle: int) -> None:
        if handle not in self._timers:
            return
        pygame.time.set_timer(handle, 0)
        pygame.event.clear(handle)
        del self._timers[handle]
        self._free_types.append(handle)
        log.debug("timer %d cleared", handle)

    # ---------- Dispatch ----------
    def dispatch(self, event: pygame.event.Event) -> bool:
        """Route one event; return True if a handler or timer consumed it."""
        if event.type in self._handlers:
            # Copy: handlers may unsubscribe while running
            for handler in list(self._handlers[event.type]):
                handler(event)
            return True
        entry = self._timers.get(event.type)
        if entry is None:
            return False
        callback, gen = entry
        if getattr(event, "gen", None) != gen:
            # Tick from a cleared arming of this type
            return False
        callback()
        return True

    def pump(self) -> bool:
        """Drain the pygame queue. Returns False once QUIT was received."""
        alive = True
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                log.info("quit requested")
                alive = False
                continue
            self.dispatch(event)
        return alive

    def close(self) -> None:
        for handle in list(self._timers):
            self.clear_interval(handle)
        for handlers in self._handlers.values():
            handlers.clear()
