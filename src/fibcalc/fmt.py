# src/fibcalc/fmt.py
from __future__ import annotations

import re
import time

from colorama import Fore, Style

# Single source of truth for ANSI stripping
ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def strip_ansi(s: str | None) -> str:
    """Return s with ANSI escape sequences removed."""
    return "" if s is None else ANSI_RE.sub("", s)


def abbr_value(value: int | str, limit: int = 20, ellipsis: str = "...") -> str:
    """Keep the first `limit` digits of long values and mark the cut."""
    s = str(value)
    return s if len(s) <= limit else f"{s[:limit]}{ellipsis}"


def format_time(ts: float) -> str:
    return time.strftime("%H:%M:%S", time.localtime(ts))


def format_result(n: int, value: int | str, *, color: bool = False) -> str:
    if not color:
        return f"F({n}) = {value}"
    return f"{Fore.CYAN}F({n}){Style.RESET_ALL} = {Fore.GREEN}{Style.BRIGHT}{value}{Style.RESET_ALL}"


def format_history_line(pos: int, n: int, value: int | str, ts: float, *, limit: int = 20) -> str:
    badge = f"F({n})"
    return f"  {pos}. {badge:<8} {abbr_value(value, limit):<{limit + 3}}  {format_time(ts)}"


def format_duration(seconds: float) -> str:
    """ms if <1s; s with millis otherwise."""
    if seconds < 1:
        return f"{seconds * 1000:.2f} ms"
    return f"{seconds:.3f} s"
