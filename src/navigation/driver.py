# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""TickDriver -- runs the navigation core once per second.

Architecture
------------
One tick is:

  1. ``navigator.check_path()`` -- listeners get ``send_route(path)`` when
     the router re-planned
  2. ``navigator.walk()``       -- listeners get ``send_position(pos)``
  3. position saved to disk when persistence is on

Ticks never overlap.  ``run()`` loops in the calling thread; ``start()``
runs the same loop on a single daemon thread (``nav-tick``), so the next
tick is only scheduled once the current one has returned.  Each loop owns
its stop event and ``tick()`` holds a lock.  ``start()`` refuses while a
stopped thread is still inside a slow tick.

A tick that raises is logged and counted; the path state is whatever the
last successful operation left, and the next tick simply retries.  After
``max_errors`` consecutive failures the driver gives up and stops.
"""

from __future__ import annotations

import json
import threading
import time
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from loguru import logger

from navigation.target import Position, Target

if TYPE_CHECKING:
    from navigation.navigator import Navigator


class NavigationListener(Protocol):
    """Anything that wants route/position pushes (UI socket, recorder...)."""

    def send_route(self, path: list[Target]) -> None:
        ...

    def send_position(self, position: Position) -> None:
        ...


class PositionStore:
    """Reads and writes the last known position as JSON."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> Position | None:
        if not self.path.is_file():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return Position(lat=float(data["lat"]), lng=float(data["lng"]))
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning(f"Ignoring unreadable position file {self.path}: {e}")
            return None

    def save(self, position: Position) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(position.to_dict()), encoding="utf-8")


class TickDriver:
    def __init__(
        self,
        navigator: Navigator,
        listeners: list[NavigationListener] | None = None,
        interval: float = 1.0,
        max_errors: int = 10,
        position_store: PositionStore | None = None,
    ) -> None:
        self.navigator = navigator
        self.listeners: list[NavigationListener] = list(listeners or [])
        self.interval = interval
        self.max_errors = max_errors
        self.position_store = position_store
        self.errors = 0
        self.ticks = 0
        self.failed = False
        self._stop = threading.Event()
        self._stop.set()
        self._tick_lock = threading.Lock()
        self._thread: threading.Thread | None = None

    @classmethod
    def from_settings(cls, navigator: Navigator, listeners: list[NavigationListener] | None = None) -> TickDriver:
        settings = navigator.ctx.settings
        store = None
        if settings.save_position:
            store = PositionStore(Path(settings.data_dir) / "position.json")
        return cls(
            navigator,
            listeners=listeners,
            interval=settings.tick_interval,
            max_errors=settings.max_tick_errors,
            position_store=store,
        )

    def add_listener(self, listener: NavigationListener) -> None:
        self.listeners.append(listener)

    @property
    def running(self) -> bool:
        return not self._stop.is_set()

    # -- One tick --------------------------------------------------------------

    def tick(self) -> bool:
        """Run one tick.  Returns True on success."""
        with self._tick_lock:
            return self._tick()

    def _tick(self) -> bool:
        nav = self.navigator
        try:
            path = nav.check_path()
            if path:
                for listener in self.listeners:
                    listener.send_route(path)
            nav.walk()
            for listener in self.listeners:
                listener.send_position(nav.position)
            if self.position_store is not None:
                self.position_store.save(nav.position)
        except Exception as e:
            self.errors += 1
            logger.exception(f"Tick failed ({self.errors}/{self.max_errors}): {e}")
            if self.errors >= self.max_errors:
                logger.error("Too many errors, aborting.")
                self.failed = True
                self._stop.set()
            return False
        self.errors = 0
        self.ticks += 1
        return True

    # -- Loops -----------------------------------------------------------------

    def run(self, ticks: int | None = None) -> None:
        """Tick in the calling thread until stopped, failed or ``ticks`` ran."""
        self._stop = threading.Event()
        self._loop(self._stop, ticks)

    def _loop(self, stop: threading.Event, ticks: int | None = None) -> None:
        # Each loop owns its stop event; a later start() never revives it
        done = 0
        while not stop.is_set() and (ticks is None or done < ticks):
            started = time.monotonic()
            self.tick()
            done += 1
            if stop.is_set() or (ticks is not None and done >= ticks):
                break
            stop.wait(max(0.0, self.interval - (time.monotonic() - started)))
        stop.set()

    def start(self) -> bool:
        """Tick on the ``nav-tick`` thread.  False if a loop thread is still alive."""
        if self._thread is not None and self._thread.is_alive():
            if not self._stop.is_set():
                return True
            logger.warning("Previous tick thread still finishing, not restarting")
            return False
        self._stop = threading.Event()
        self._thread = threading.Thread(
            target=self._loop, args=(self._stop,), name="nav-tick", daemon=True
        )
        self._thread.start()
        return True

    def stop(self, timeout: float | None = None) -> None:
        self._stop.set()
        if self._thread is None:
            return
        self._thread.join(timeout=timeout if timeout is not None else max(2.0, self.interval * 2))
        if self._thread.is_alive():
            logger.warning("Tick thread still busy after stop, it exits after the current tick")
        else:
            self._thread = None
