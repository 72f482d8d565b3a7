"""
Curses Frontend for Terminal Budget

Run with:  python app/main.py

The front-end is deliberately thin:
1. Translate curses input into the key names of terminal_budget.session.keys
2. Hand each key to the state machine
3. Draw whatever describe() says is on screen

All state and all decisions live in the session engine.
"""

import curses
import sys
from contextlib import contextmanager

from terminal_budget.config import validate_all_settings
from terminal_budget.orchestrator import create_app_components
from terminal_budget.session import keys
from terminal_budget.session.views import (
    BudgetCreationView,
    ConfirmationView,
    GreetingView,
    WalletView,
    WizardView,
)


SPECIAL_KEYS = {
    curses.KEY_ENTER: keys.ENTER,
    10: keys.ENTER,
    13: keys.ENTER,
    27: keys.ESC,
    curses.KEY_UP: keys.UP,
    curses.KEY_DOWN: keys.DOWN,
    curses.KEY_LEFT: keys.LEFT,
    curses.KEY_RIGHT: keys.RIGHT,
    curses.KEY_BACKSPACE: keys.BACKSPACE,
    127: keys.BACKSPACE,
    8: keys.BACKSPACE,
    curses.KEY_DC: keys.DELETE,
    3: keys.CTRL_C,
}

TABLE_HEADER = f"    {'Name':<15} {'Owner':<12} {'Type':<10} {'Balance':>10}  {'Currency':<8}"


def translate(ch) -> str:
    """Map a get_wch() result to a key name ("" for keys we ignore)."""
    if isinstance(ch, str):
        code = ord(ch)
        if code in SPECIAL_KEYS:
            return SPECIAL_KEYS[code]
        return ch if ch.isprintable() else ""
    return SPECIAL_KEYS.get(ch, "")


def truncate(text: str, width: int) -> str:
    if len(text) <= width:
        return text
    return text[:width - 3] + "..."


@contextmanager
def temp_cursor(state: int):
    prev = None
    try:
        prev = curses.curs_set(state)
    except curses.error:  # some terminals cannot hide the cursor
        pass
    try:
        yield
    finally:
        if prev is not None:
            try:
                curses.curs_set(prev)
            except curses.error:
                pass


class Painter:
    """Writes lines top-down, clipped to the window."""

    def __init__(self, stdscr):
        self._scr = stdscr
        self._row = 0
        self.height, self.width = stdscr.getmaxyx()

    def line(self, text: str = "", attr: int = curses.A_NORMAL) -> None:
        if self._row >= self.height - 1:
            return
        try:
            self._scr.addnstr(self._row, 0, text, max(0, self.width - 1), attr)
        except curses.error:
            pass
        self._row += 1

    def lines(self, text: str, attr: int = curses.A_NORMAL) -> None:
        for part in text.splitlines():
            self.line(part, attr)

    def input_line(self, label: str, text: str, cursor: int) -> None:
        shown = text[:cursor] + "█" + text[cursor:]
        self.line(f"{label}: {shown}")

    def error(self, message) -> None:
        if message:
            self.line()
            self.line(f"Error: {message}", curses.A_BOLD)


def draw_greeting(p: Painter, view: GreetingView) -> None:
    p.line(view.greeting, curses.A_BOLD)
    p.line(view.question)
    p.line()
    for entry in view.files:
        prefix = "[x] " if entry.selected else "[ ] "
        p.line(f"{prefix}{entry.name:<20} {entry.updated}")
    p.line("-" * 40)
    prefix = "[x] " if view.new_entry_selected else "[ ] "
    p.line(f"{prefix}{view.new_entry_label}")
    p.line()
    p.line("↑/↓ select · enter open · d delete · esc quit", curses.A_DIM)
    p.error(view.error)


def draw_budget_creation(p: Painter, view: BudgetCreationView) -> None:
    p.line(view.title, curses.A_BOLD)
    p.line()
    p.input_line(view.prompt, view.input.text, view.input.cursor)
    p.line()
    p.line("enter create · esc back", curses.A_DIM)
    p.error(view.error)


def draw_wallets(p: Painter, view: WalletView) -> None:
    p.line(f"{view.title} · {view.budget_name}", curses.A_BOLD)
    p.line()
    if view.empty_hint:
        p.line(view.empty_hint)
    else:
        p.line(TABLE_HEADER)
        p.line("-" * len(TABLE_HEADER))
        for row in view.rows:
            text = (
                f"{row.index:2d}. {truncate(row.name, 15):<15} "
                f"{truncate(row.owner, 12):<12} {truncate(row.type, 10):<10} "
                f"{row.balance:10.2f}  {row.currency:<8}"
            )
            p.line(text, curses.A_DIM if row.excluded else curses.A_NORMAL)
        p.line("-" * len(TABLE_HEADER))
        totals = view.totals
        right = f"{totals.total:.2f} {totals.currency or ''}".rstrip()
        p.line(f"{totals.count_label:<{len(TABLE_HEADER) - len(right)}}{right}")
        if totals.unconverted:
            p.line(f"not converted: {', '.join(totals.unconverted)}", curses.A_DIM)

    if view.active_filters:
        filters = ", ".join(f"{k}={v}" for k, v in view.active_filters.items())
        p.line(f"filters: {filters}", curses.A_DIM)
    p.line()
    p.input_line(">", view.command.text, view.command.cursor)
    if view.command_result:
        p.lines(view.command_result)
    p.error(view.error)


def draw_wizard(p: Painter, view: WizardView) -> None:
    p.line(f"{view.title} ({view.step + 1}/{view.step_count})", curses.A_BOLD)
    for field, value in view.collected.items():
        p.line(f"  {field}: {value}", curses.A_DIM)
    p.line()
    p.line(view.prompt)
    for option in view.options:
        prefix = "> " if option.selected else "  "
        p.line(f"{prefix}{option.label}", curses.A_REVERSE if option.selected else curses.A_NORMAL)
    if view.accepts_text:
        p.input_line("value", view.input.text, view.input.cursor)
    p.line()
    p.line("enter next · ↑/↓ choose · esc cancel", curses.A_DIM)
    p.error(view.error)


def draw_confirmation(p: Painter, view: ConfirmationView) -> None:
    p.line(view.prompt, curses.A_BOLD)
    p.line()
    p.line(view.hint)
    p.error(view.error)


DRAWERS = {
    "greeting": draw_greeting,
    "budget_creation": draw_budget_creation,
    "wallet": draw_wallets,
    "wallet_creation": draw_wizard,
    "confirmation": draw_confirmation,
}


def main(stdscr) -> None:
    components = create_app_components()
    machine = components.machine

    curses.raw()
    curses.set_escdelay(25)
    stdscr.keypad(True)
    with temp_cursor(0):
        while not machine.quit_requested:
            view = components.view()
            stdscr.erase()
            DRAWERS[view.kind](Painter(stdscr), view)
            stdscr.refresh()

            ch = stdscr.get_wch()
            if ch == curses.KEY_RESIZE:
                curses.update_lines_cols()
                stdscr.clearok(True)
                continue

            key = translate(ch)
            if key:
                machine.handle_key(key)


def check_settings() -> bool:
    """Report invalid settings sections before the screen is taken over."""
    status = validate_all_settings()
    ok = True
    for section in ("storage", "rates", "app"):
        if not status.get(section, False):
            error = status.get(f"{section}_error", "invalid")
            print(f"Invalid {section} settings: {error}", file=sys.stderr)
            ok = False
    return ok


if __name__ == "__main__":
    if not check_settings():
        sys.exit(1)
    curses.wrapper(main)
