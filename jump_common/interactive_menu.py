from __future__ import annotations

import curses
import sys
from dataclasses import dataclass
from typing import Any, List, Optional

KEY_ESCAPE = 27
KEY_CTRL_N = 14
KEY_CTRL_P = 16
BACKSPACE_KEYS = (curses.KEY_BACKSPACE, 127, 8)
ENTER_KEYS = (10, 13, curses.KEY_ENTER)


@dataclass
class OptionData:
    title: str
    data: Optional[Any] = None


def filter_options(option_data: List[OptionData], typed: str) -> List[OptionData]:
    """Options whose title contains every typed word, ignoring case."""
    words = typed.lower().split()
    return [od for od in option_data if all(word in od.title.lower() for word in words)]


def interactive_select_with_arrows(option_data: List[OptionData], menu_title: Optional[str] = None) -> Optional[OptionData]:
    """Pick one option; the first option starts highlighted.

    - Up/Down (or Ctrl-P/Ctrl-N) to move, PgUp/PgDn to move a page
    - Typing narrows the list, Backspace widens it again
    - Enter to select, ESC or Ctrl-C to cancel (returns None)

    The menu is drawn on the terminal, so it needs stdin and stdout to be TTYs. When
    the shell captures stdout (`$(...)`) or curses fails, a numbered prompt on stderr
    is used instead.
    """
    if not option_data:
        return None

    if not sys.stdin.isatty() or not sys.stdout.isatty():
        return _numeric_fallback(option_data, menu_title)
    try:
        return curses.wrapper(_run_menu, option_data, menu_title or "")
    except curses.error:
        return _numeric_fallback(option_data, menu_title)
    except KeyboardInterrupt:
        return None


def _run_menu(stdscr: "curses._CursesWindow", option_data: List[OptionData], title: str) -> Optional[OptionData]:
    curses.curs_set(0)
    stdscr.keypad(True)
    curses.use_default_colors()

    typed = ""
    shown = option_data
    cursor = 0
    top = 0

    while True:
        height, _ = stdscr.getmaxyx()
        # title row + filter row
        visible_rows = max(1, height - 2)
        cursor = min(cursor, max(0, len(shown) - 1))
        if cursor < top:
            top = cursor
        elif cursor >= top + visible_rows:
            top = cursor - visible_rows + 1

        _draw_menu(stdscr, shown, title, typed, cursor, top)

        ch = stdscr.getch()
        if ch in ENTER_KEYS:
            if shown:
                return shown[cursor]
        elif ch == KEY_ESCAPE:
            return None
        elif ch in (curses.KEY_UP, KEY_CTRL_P):
            cursor = max(0, cursor - 1)
        elif ch in (curses.KEY_DOWN, KEY_CTRL_N):
            cursor = min(len(shown) - 1, cursor + 1) if shown else 0
        elif ch == curses.KEY_PPAGE:
            cursor = max(0, cursor - visible_rows)
        elif ch == curses.KEY_NPAGE:
            cursor = min(len(shown) - 1, cursor + visible_rows) if shown else 0
        elif ch in BACKSPACE_KEYS:
            if typed:
                typed = typed[:-1]
                shown = filter_options(option_data, typed)
                cursor, top = 0, 0
        elif 32 <= ch < 127:
            typed += chr(ch)
            shown = filter_options(option_data, typed)
            cursor, top = 0, 0


def _draw_menu(
    stdscr: "curses._CursesWindow",
    shown: List[OptionData],
    title: str,
    typed: str,
    cursor: int,
    top: int,
) -> None:
    stdscr.erase()
    height, width = stdscr.getmaxyx()
    if height < 3 or width < 2:
        stdscr.refresh()
        return

    header = f"{title} (↑/↓ to move, type to filter, Enter to select, ESC to cancel)".strip()
    stdscr.addstr(0, 0, header[: width - 1], curses.A_BOLD)
    stdscr.addstr(1, 0, f"> {typed}"[: width - 1])

    if not shown:
        stdscr.addstr(2, 0, "(no match)"[: width - 1], curses.A_DIM)
    for y, (i, od) in enumerate(enumerate(shown[top: top + height - 2], start=top), start=2):
        attr = curses.A_REVERSE if i == cursor else curses.A_NORMAL
        stdscr.addstr(y, 0, od.title[: width - 1], attr)
    stdscr.refresh()


def _numeric_fallback(option_data: List[OptionData], title: Optional[str] = None) -> Optional[OptionData]:
    """Numbered prompt on stderr, so a captured stdout only ever receives the selection.

    Anything that is not a number narrows the list the way typing does in the menu.
    """
    shown = option_data
    while True:
        if title:
            print(title, file=sys.stderr)
        for num, od in enumerate(shown, start=1):
            print(f"  [{num}] {od.title}", file=sys.stderr)
        print("Select number, type words to filter, or 'q' to cancel: ", end="", file=sys.stderr, flush=True)
        raw = sys.stdin.readline()
        if not raw:
            return None
        raw = raw.strip()
        if raw.lower() in {"q", "quit", "exit"}:
            return None
        if raw.isdigit():
            num = int(raw)
            if 1 <= num <= len(shown):
                return shown[num - 1]
            print("Invalid choice. Enter a number from the list.", file=sys.stderr)
            continue
        narrowed = filter_options(option_data, raw)
        if narrowed:
            shown = narrowed
        else:
            print(f"Nothing matches '{raw}'.", file=sys.stderr)
