"""Terminal spinner shown while the generator is working."""

from __future__ import annotations

import sys
import threading
import time
from typing import Optional, TextIO

RESET = "\033[0m"
CYAN = "\033[96m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
CLEAR_LINE = "\033[K"

FRAMES = ("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏")


class Spinner:
    """Animated status line redrawn from a background thread.

    The label can be changed while the spinner runs. ``stop`` leaves a final
    line with a status glyph. Use as a context manager to guarantee the
    thread is stopped (with a failure glyph) when the body raises.
    """

    def __init__(
        self,
        label: str,
        stream: Optional[TextIO] = None,
        interval: float = 0.08,
        animate: Optional[bool] = None,
    ) -> None:
        self.label = label
        self.stream = stream or sys.stdout
        self.interval = interval
        if animate is None:
            isatty = getattr(self.stream, "isatty", None)
            animate = bool(isatty and isatty())
        self.animate = animate
        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._active = False
        self._started_at: Optional[float] = None
        self._frame = 0

    @property
    def running(self) -> bool:
        return self._active

    def elapsed(self) -> float:
        if self._started_at is None:
            return 0.0
        return time.monotonic() - self._started_at

    def start(self) -> "Spinner":
        if self._active:
            return self
        self._active = True
        self._started_at = time.monotonic()
        self._stop_event.clear()
        if self.animate:
            self._thread = threading.Thread(target=self._spin, daemon=True)
            self._thread.start()
        else:
            # Plain streams (pipes, tests) get one line instead of frames
            self._write(f"{CYAN}… {self.label}{RESET}\n")
        return self

    def update(self, label: str) -> None:
        with self._lock:
            self.label = label

    def stop(self, symbol: str = "✔", color: str = GREEN) -> None:
        if not self._active:
            return
        self._active = False
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None
        with self._lock:
            line = f"{color}{symbol} {self.label}{RESET}"
        if self.animate:
            self._write(f"\r{line}{CLEAR_LINE}\n")
        else:
            self._write(f"{line}\n")

    def fail(self, symbol: str = "❌") -> None:
        self.stop(symbol, RED)

    def _spin(self) -> None:
        while not self._stop_event.is_set():
            with self._lock:
                frame = FRAMES[self._frame % len(FRAMES)]
                self._frame += 1
                line = f"\r{CYAN}{frame} {self.label}{RESET}{CLEAR_LINE}"
            self._write(line)
            self._stop_event.wait(self.interval)

    def _write(self, text: str) -> None:
        self.stream.write(text)
        self.stream.flush()

    def __enter__(self) -> "Spinner":
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.stop()
        else:
            self.fail()
