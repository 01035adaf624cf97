# History.py
"""
Evaluation history and keypad text actions.

The history belongs to the UI: every function takes the current history and
returns a new one, nothing is kept at module level. The keypad actions are
plain text transformations of the input line; the percent key in particular
appends '*0.01' to the raw text and has nothing to do with the '%' operator
of the expression grammar.
"""
import logging
from collections import namedtuple

from . import MathEngine
from . import error as E

logger = logging.getLogger(__name__)

# Most entries the history list shows
HISTORY_LIMIT = 10
PERCENT_SUFFIX = "*0.01"
# Generic failure indicator for the live preview
ERROR_TEXT = "Error"

HistoryEntry = namedtuple("HistoryEntry", ["expression", "result"])


def clamp_limit(limit):
    """Keep a configured history size between 1 and HISTORY_LIMIT."""
    try:
        limit = int(limit)
    except (TypeError, ValueError):
        return HISTORY_LIMIT
    return max(1, min(limit, HISTORY_LIMIT))


def add_entry(history, expression, result, limit=HISTORY_LIMIT):
    """Return a new history with (expression, result) in front, most recent first."""
    entries = [HistoryEntry(expression, result)] + list(history)
    return tuple(entries[:clamp_limit(limit)])


def preview(text):
    """Text for the result line while typing: the result or ERROR_TEXT."""
    try:
        return MathEngine.calculate(text)
    except E.MathError:
        return ERROR_TEXT


def apply_percent(text):
    return f"{text}{PERCENT_SUFFIX}"


def backspace(text):
    return text[:-1]


def submit(text, history, limit=HISTORY_LIMIT):
    """Equals key / Enter.

    Returns (new_input_text, new_history): the formatted result replaces the
    input and the pair is recorded in the history. A failed evaluation raises
    the MathError, leaving the caller's input and history as they were.
    """
    result = MathEngine.calculate(text)
    new_history = add_entry(history, text, result, limit)
    logger.info("Submitted %r = %s (%d in history)", text, result, len(new_history))
    return result, new_history


def replay(entry):
    """Clicking a history entry: its expression goes back into the input."""
    return entry.expression, preview(entry.expression)
