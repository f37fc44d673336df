# src/fibcalc/cli.py

"""
Fibonacci Calculator - exact Fibonacci numbers from the terminal

Description:
    Computes F(n) exactly for a bounded index n (0..45 by default), explains
    invalid input, and keeps the last few calculations of the session for
    quick replay.

usage: see fibcalc -h
"""

from __future__ import annotations

import argparse
import faulthandler
import os
import platform
import re
import sys
import textwrap
import time
import traceback
from dataclasses import dataclass
from importlib.resources import files as pkg_files

from colorama import Fore, Style
from colorama import init as colorama_init

from fibcalc import __version__ as _ver
from fibcalc import config as CONFIG
from fibcalc.engine import fibonacci_sequence
from fibcalc.fmt import format_duration, format_history_line, format_result
from fibcalc.history import HistoryStore
from fibcalc.messages import available_locales, error_message, text
from fibcalc.progress import Spinner
from fibcalc.runtime import APPLY, CFG
from fibcalc.runtime import current as _rt_current
from fibcalc.session import EXAMPLE_SHORTCUTS, Computed, Event, HistoryChanged, Rejected, Session
from fibcalc.utility import UserInputError, clear_screen, flatten_dotted, typename
from fibcalc.workspace import ensure_workspace_seeded, workspace_dir

_COMMANDS = {"init", "where", "profiles"}

# sign or digit up front: always an index, never a profile name
_INDEX_LIKE = re.compile(r"^[+-]?\d")


def _install_loud_error_handlers(debug: bool) -> None:
    if not debug:
        return
    # Always show full Python tracebacks; faulthandler needs a real file descriptor
    if sys.__stderr__ is not None:
        faulthandler.enable(file=sys.__stderr__)

    def _excepthook(exc_type, exc, tb):
        sys.stderr.write("\n[UNCAUGHT EXCEPTION]\n")
        traceback.print_exception(exc_type, exc, tb, file=sys.stderr)
        sys.stderr.flush()
    sys.excepthook = _excepthook


def _print_user_error(msg: str) -> None:
    """Uniform, one-line friendly error."""
    prefix = f"{Fore.RED}Error:{Style.RESET_ALL}"
    if not msg.startswith("Error:"):
        msg = f"{prefix} {msg}"
    print(msg, file=sys.stderr)


def _debug(msg: str) -> None:
    if _rt_current().debug:
        print(f"{Fore.MAGENTA}[debug]{Style.RESET_ALL} {msg}", file=sys.stderr)


def _resolve_inputs(items: list[str]) -> tuple[str | None, str | None]:
    """Return (profile_or_command, raw_number) from the positionals.

    Rules:
      - one item: a command or known profile -> (item, None); else -> (None, item)
      - an item that starts like a number is never taken as a profile
      - two items: (profile, raw_number)
    """
    if not items:
        return None, None
    if len(items) == 1:
        it = items[0]
        if it in _COMMANDS or (not _INDEX_LIKE.match(it) and CONFIG.has_profile(it)):
            return it, None
        return None, it
    return items[0], items[1]


# ---- rendering ----

@dataclass
class _Console:
    """Turns session events into terminal output."""
    session: Session
    locale: str = "en"
    locale_pinned: bool = False  # set by --locale or the REPL "locale" command
    spinner: Spinner | None = None

    def __call__(self, event: Event) -> None:
        if isinstance(event, Computed):
            print(f"{Fore.GREEN}{text('done_title', self.locale)}:{Style.RESET_ALL} "
                  + format_result(event.n, event.value, color=True))
        elif isinstance(event, Rejected):
            msg = error_message(event.kind, max_n=self.session.bound, locale=self.locale)
            print(f"{Fore.RED}{text('error_title', self.locale)}:{Style.RESET_ALL} {msg}", file=sys.stderr)
        elif isinstance(event, HistoryChanged):
            _debug(f"history: {len(event.entries)}/{self.session.history.capacity} entries")

    def show_history(self) -> None:
        entries = self.session.history.entries()
        if not entries:
            print(text("history_empty", self.locale))
            return
        limit = int(CFG("DISPLAY.ABBR_DIGITS", 20))
        print(f"{Style.BRIGHT}{text('history_header', self.locale, count=len(entries))}{Style.RESET_ALL}")
        for pos, e in enumerate(entries, 1):
            print(format_history_line(pos, e.n, e.value, e.timestamp, limit=limit))

    def show_examples(self) -> None:
        preview = ", ".join(str(v) for v in fibonacci_sequence(11))
        print(f"{text('about', self.locale)}: {preview}...")
        shortcuts = "  ".join(f"{i}=F({n})" for i, n in enumerate(EXAMPLE_SHORTCUTS, 1))
        print(f"{text('examples', self.locale)}: {shortcuts}")

    def use_locale(self, locale: str, *, pin: bool = False) -> None:
        if self.locale_pinned and not pin:
            return
        self.locale = locale
        self.locale_pinned = self.locale_pinned or pin
        if self.spinner is not None:
            self.spinner.label = text("calculating", locale)

    def show_help(self) -> None:
        print(textwrap.dedent(f"""\
            {Style.BRIGHT}Commands{Style.RESET_ALL}
              <n>            calculate F(n)
              <Enter>        calculate the pre-filled input (quit when empty)
              hist           show the last calculations
              r <k>          pre-fill with history entry k (1 = newest)
              ex [<k>]       list examples / pre-fill with example k
              c              clear input, result and error
              debug on|off   toggle diagnostics
              locale <xx>    switch message language ({", ".join(available_locales())})
              <profile>      switch profile
              q              quit"""))


# ---- argparse ----
def _build_parser() -> argparse.ArgumentParser:

    epilog = textwrap.dedent("""\
    commands:
      init
          Create the workspace folder and copy packaged sample profiles if missing.

      where
          Show the workspace and package paths.

      profiles
          List available profiles with their descriptions.
    """)

    p = argparse.ArgumentParser(
        prog="fibcalc",
        description="Fibonacci Calculator — exact F(n) with a short session history",
        usage=(
            "fibcalc [[profile] [n]] [--locale LOCALE] [--delay-ms MS] [--debug]\n"
            "       fibcalc init | where | profiles\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=epilog,
    )
    p.add_argument("items", nargs="*", metavar="[[profile] n]",
                   help="optional profile name followed by the index to calculate")
    p.add_argument("--locale", default=None, help="Message language (en, ru)")
    p.add_argument("--delay-ms", type=int, default=None, help="Pause before reporting a result")
    p.add_argument("--debug", action="store_true", help="Show timings and internal trace info")
    p.add_argument("--version", action="version", version=f"%(prog)s {_ver}")

    return p


def main(argv=None) -> int:
    """Thin wrapper: catch friendly errors, hide tracebacks unless debug."""
    try:
        return _main_impl(argv)
    except UserInputError as e:
        _print_user_error(str(e))
        return 2
    except KeyboardInterrupt:
        print("Aborted by user.", file=sys.stderr)
        return 130
    except Exception as e:
        debug = "--debug" in (argv if argv is not None else sys.argv)
        if debug:
            raise
        print(f"Unexpected error: {e.__class__.__name__}: {e}", file=sys.stderr)
        print("Run with --debug for a full traceback.", file=sys.stderr)
        return 1


def _configure_text_streams() -> None:
    # Respect explicit user choice
    if os.environ.get("PYTHONIOENCODING"):
        return
    # Only touch redirected output (pipes/files), leave TTY as-is
    if sys.stdout.isatty() or not hasattr(sys.stdout, "reconfigure"):
        return
    enc = (sys.stdout.encoding or "").lower()
    if platform.system() == "Windows" or enc in ("", "ascii", "us-ascii"):
        sys.stdout.reconfigure(encoding="utf-8", errors="replace")
        sys.stderr.reconfigure(encoding="utf-8", errors="replace")


def _apply_profile(name: str, *, debug: bool = False) -> None:
    selected = CONFIG.load_settings(name)
    APPLY(selected)
    # an explicit --debug (or REPL "debug on") wins over BEHAVIOUR.DEBUG
    if debug:
        _rt_current().debug = True

    limit = int(CFG("BEHAVIOUR.MAX_DIGITS", 100_000))
    if not os.environ.get("PYTHONINTMAXSTRDIGITS"):
        sys.set_int_max_str_digits(limit)

    if _rt_current().debug:
        _debug(f"active profile: {selected.name}")
        if selected._source:
            _debug(f"profile file: {selected._source}")
        flat = flatten_dotted(selected.as_dict())
        for k in sorted(flat, key=str.lower):
            v = CFG(k, None)
            print(f"        {k:.<40} {v!r} ({typename(v)})", file=sys.stderr)


def _submit(session: Session, raw: str | None = None) -> Computed | Rejected:
    t0 = time.perf_counter()
    outcome = session.submit(raw)
    _debug(f"submit {session.input_text!r} -> {type(outcome).__name__} "
           f"in {format_duration(time.perf_counter() - t0)}")
    return outcome


# ---- main ----
def _main_impl(argv=None) -> int:

    colorama_init(autoreset=True)
    _configure_text_streams()

    parser = _build_parser()
    args = parser.parse_args(argv)
    rt = _rt_current()
    rt.debug = bool(args.debug)

    _install_loud_error_handlers(args.debug)

    # Ensure a first-run workspace seed silently
    ws, _, copied = ensure_workspace_seeded()

    profile, raw_n = _resolve_inputs(args.items)

    if profile == "init":
        print(f"Workspace ready at: {ws}")
        print(f"Copied -> profiles: {copied.get('profiles', 0)}")
        return 0
    if profile == "where":
        print(f"Workspace: {workspace_dir()}")
        print(f"Package:   {pkg_files('fibcalc')}")
        return 0
    if profile == "profiles":
        for name, desc in CONFIG.list_profiles_with_descriptions():
            print(f"  {Fore.CYAN}{name:<12}{Style.RESET_ALL} {desc}")
        return 0

    if profile and not CONFIG.has_profile(profile):
        print(f"Unknown profile: '{profile}'", file=sys.stderr)
        print("Available profiles:", ", ".join(CONFIG.list_all_profiles()), file=sys.stderr)
        return 2

    _apply_profile(profile or "default", debug=args.debug)

    locale = args.locale or rt.locale
    if locale not in available_locales():
        raise UserInputError(f"unknown locale '{locale}' (available: {', '.join(available_locales())})")

    spinner = Spinner(text("calculating", locale), enabled=sys.stdout.isatty() and not rt.debug)
    session = Session(
        history=HistoryStore(rt.history_capacity),
        delay=spinner.wait,
        delay_s=(max(0, args.delay_ms) / 1000.0) if args.delay_ms is not None else None,
    )
    console = _Console(session=session, locale=locale, locale_pinned=args.locale is not None, spinner=spinner)
    session.subscribe(console)

    # --- one-shot number path ---
    if raw_n is not None:
        outcome = _submit(session, raw_n)
        return 0 if isinstance(outcome, Computed) else 2

    return _repl(session, console)


def _repl(session: Session, console: _Console) -> int:
    if not _rt_current().debug:
        clear_screen()
    print(f"{Fore.YELLOW}{Style.BRIGHT}Fibonacci Calculator v{_ver}{Style.RESET_ALL}")
    console.show_examples()

    current_profile = _rt_current().profile_name
    while True:
        try:
            hint = text("prompt", console.locale, max_n=session.bound)
            pre = f" [{session.input_text}]" if session.input_text else ""
            user_input = input(f"\nProfile: {current_profile} — {hint}{pre} (h=Help, q=Quit): ").strip()

            low = user_input.lower()
            if low in {"q", "quit"}:
                break

            if low == "":
                if not session.input_text:
                    break
                _submit(session)
                continue

            if low in {"h", "help"}:
                console.show_help()
                continue

            if low in {"hist", "history"}:
                console.show_history()
                continue

            if low in {"c", "clear"}:
                session.clear()
                print(text("cleared", console.locale))
                continue

            parts = low.split()
            if parts[0] in {"r", "replay"} and len(parts) == 2 and parts[1].isdigit():
                try:
                    n = session.replay_entry(int(parts[1]))
                except IndexError as e:
                    _print_user_error(str(e))
                    continue
                print(text("prefilled", console.locale, n=n))
                continue

            if parts[0] in {"ex", "examples"}:
                if len(parts) == 1:
                    console.show_examples()
                    continue
                k = int(parts[1]) if parts[1].isdigit() else 0
                if not 1 <= k <= len(EXAMPLE_SHORTCUTS):
                    _print_user_error(f"no example #{parts[1]} (1..{len(EXAMPLE_SHORTCUTS)})")
                    continue
                n = session.replay(EXAMPLE_SHORTCUTS[k - 1])
                print(text("prefilled", console.locale, n=n))
                continue

            if parts[0] == "debug":
                rt = _rt_current()
                if len(parts) == 1 or parts[1] == "status":
                    print(f"Debug is currently {'ON' if rt.debug else 'OFF'}.")
                elif parts[1] in {"on", "off"}:
                    rt.debug = parts[1] == "on"
                    print(f"Debug mode {'enabled' if rt.debug else 'disabled'} for this session.")
                else:
                    print("Usage: DEBUG [on|off|status]")
                continue

            if parts[0] == "locale":
                if len(parts) == 2 and parts[1] in available_locales():
                    console.use_locale(parts[1], pin=True)
                    print(f"Locale: {console.locale}")
                else:
                    print(f"Usage: LOCALE [{'|'.join(available_locales())}]")
                continue

            # profile switch; the history (and its capacity) belongs to the session
            if not _INDEX_LIKE.match(user_input) and CONFIG.has_profile(user_input):
                try:
                    _apply_profile(user_input, debug=_rt_current().debug)
                except UserInputError as e:
                    _print_user_error(str(e))
                    continue
                current_profile = _rt_current().profile_name
                if _rt_current().locale in available_locales():
                    console.use_locale(_rt_current().locale)
                print(f"Applied profile: {current_profile}")
                continue

            # anything else is an index (validation reports what is wrong with it)
            _submit(session, user_input)

        except (EOFError, KeyboardInterrupt):
            print()
            break
        except Exception as e:
            if _rt_current().debug:
                traceback.print_exc()
            else:
                _print_user_error(f"{e.__class__.__name__}: {e}")
            continue
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
