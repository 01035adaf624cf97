# ScientificEngine
"""
Fixed function and constant tables for the calculator.

Both tables are built once at import time and exposed read-only, so nothing
coming from user input can add or replace an entry.

Python's math module raises where IEEE-754 returns a special value
(math.sqrt(-1), math.log10(0), math.sin(inf), ...). The wrappers below return
the IEEE value instead, so the evaluator can carry NaN / infinity through the
tree and decide once, at the end, whether the result is usable.
"""
import math
from types import MappingProxyType


NAN = float("nan")
INF = float("inf")


def to_radians(value):
    """Trigonometric functions take their argument in degrees."""
    return math.radians(value)


def sin(value):
    if math.isinf(value):
        return NAN
    return math.sin(to_radians(value))


def cos(value):
    if math.isinf(value):
        return NAN
    return math.cos(to_radians(value))


def tan(value):
    if math.isinf(value):
        return NAN
    return math.tan(to_radians(value))


def sqrt(value):
    if value < 0:
        return NAN
    return math.sqrt(value)


def log(value):
    """Base-10 logarithm."""
    if value == 0:
        return -INF
    if value < 0:
        return NAN
    return math.log10(value)


def ln(value):
    """Natural logarithm."""
    if value == 0:
        return -INF
    if value < 0:
        return NAN
    return math.log(value)


FUNCTIONS = MappingProxyType({
    "sin": sin,
    "cos": cos,
    "tan": tan,
    "sqrt": sqrt,
    "log": log,
    "ln": ln,
})

CONSTANTS = MappingProxyType({
    "pi": math.pi,
    "e": math.e,
})


def isFunction(name):
    return name in FUNCTIONS


def isConstant(name):
    return name in CONSTANTS
