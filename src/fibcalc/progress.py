# src/fibcalc/progress.py
from __future__ import annotations

import sys
import time


class Spinner:
    """One-line spinner drawn while the session's delay hook waits."""

    def __init__(self, label: str = "Calculating...", *, enabled: bool = True, frame_s: float = 0.05):
        self.label = label
        self.enabled = enabled
        self.frame_s = frame_s
        self.spin = "|/-\\"
        self.i = 0

    def _draw(self) -> None:
        self.i = (self.i + 1) % len(self.spin)
        sys.stdout.write(f"\r[{self.spin[self.i]}] {self.label[:50]}")
        sys.stdout.flush()

    def done(self) -> None:
        if not self.enabled:
            return
        sys.stdout.write("\r" + " " * 60 + "\r")
        sys.stdout.flush()

    def wait(self, seconds: float) -> None:
        """Sleep for `seconds`, animating when enabled. Usable as Session.delay."""
        if not self.enabled:
            time.sleep(seconds)
            return
        end = time.perf_counter() + seconds
        left = seconds
        while left > 0:
            self._draw()
            time.sleep(min(self.frame_s, left))
            left = end - time.perf_counter()
        self.done()
