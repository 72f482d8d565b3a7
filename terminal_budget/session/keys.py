"""
Key names understood by the session engine.

Front-ends translate their raw input into these strings. Any other
single printable character is treated as typed text.
"""

from terminal_budget.models.session import LineBuffer


ENTER = "enter"
ESC = "esc"
UP = "up"
DOWN = "down"
LEFT = "left"
RIGHT = "right"
BACKSPACE = "backspace"
DELETE = "delete"
CTRL_C = "ctrl+c"


def is_text(key: str) -> bool:
    return len(key) == 1 and key.isprintable()


def edit_line(buffer: LineBuffer, key: str) -> bool:
    """Apply an editing key to `buffer`. Returns False if `key` is not one."""
    if key == BACKSPACE:
        buffer.backspace()
    elif key == LEFT:
        buffer.left()
    elif key == RIGHT:
        buffer.right()
    elif is_text(key):
        buffer.insert(key)
    else:
        return False
    return True
