# MathEngine.py
"""""
Core calculation engine for the Expression Calculator.

Pipeline
--------
1) Sanitizer: normalizes operator glyphs (×, ÷, −) and strips whitespace.
2) Validator: rejects characters outside the calculator alphabet.
3) Tokenizer: converts the sanitized string into a flat list of tokens.
4) Parser (AST): builds an Abstract Syntax Tree (recursive-descent, precedence aware).
5) Evaluator: walks the tree with IEEE-754 float semantics; the final result must be finite.
6) Formatter: renders a result so that it can be typed back in unchanged.

Nothing in here compiles or executes user text as Python code. Names are
resolved only through the read-only tables in ScientificEngine.
"""""

import logging
import math
import re
import string
from collections import deque, namedtuple
from decimal import Decimal

from . import ScientificEngine
from . import error as E

logger = logging.getLogger(__name__)

# Supported operators (kept as a simple list for quick membership checks)
Operations = ["+", "-", "*", "/", "^", "%"]
# Operators whose chains group from the left
LEFT_ASSOCIATIVE = "+-*/%"

# Visually distinct glyphs accepted from the keypad / clipboard
GLYPHS = {
    "\u00d7": "*",  # multiplication sign
    "\u00f7": "/",  # division sign
    "\u2212": "-",  # minus sign
}

# Token kinds
NUMBER = "NUMBER"
IDENTIFIER = "IDENTIFIER"
OPERATOR = "OPERATOR"
LPAREN = "LPAREN"
RPAREN = "RPAREN"
COMMA = "COMMA"

PUNCTUATION = {"(": LPAREN, ")": RPAREN, ",": COMMA}

DIGITS = string.digits
LETTERS = string.ascii_letters

# Parentheses, calls, unary minus and '^' chains may nest this deep
MAX_NESTING = 100
# Deepest recursion the evaluator may need (left-associative chains are walked in a loop)
MAX_TREE_DEPTH = 400

_WHITESPACE = re.compile(r"\s+")
_INVALID_CHARACTER = re.compile(r"[^0-9+\-*/^().,%A-Za-z]")

NAN = float("nan")
INF = float("inf")


Token = namedtuple("Token", ["kind", "text", "position"])


# -----------------------------
# Sanitizer / Validator
# -----------------------------

def sanitize(problem):
    """Replace alternate operator glyphs with ASCII and drop all whitespace."""
    if not problem:
        return ""
    for glyph, replacement in GLYPHS.items():
        problem = problem.replace(glyph, replacement)
    return _WHITESPACE.sub("", problem)


def validate(problem):
    """Raise InvalidCharacterError on the first character outside the alphabet."""
    match = _INVALID_CHARACTER.search(problem)
    if match:
        raise E.InvalidCharacterError(
            f"Invalid character {match.group()!r} at position {match.start()}", code="3030")


# -----------------------------
# Tokenizer
# -----------------------------

def tokenize(problem):
    """Convert a sanitized string into a token list.

    Numbers are runs of digits with at most one '.', identifiers are maximal
    runs of letters ('pie' stays one identifier), everything else is a
    single-character token.
    """
    tokens = []
    b = 0

    while b < len(problem):
        current_char = problem[b]
        start = b

        # --- Numbers: digits and decimal separator ---
        if current_char in DIGITS or current_char == ".":
            has_dot = False  # Only one dot allowed in a numeric literal
            while b < len(problem) and (problem[b] in DIGITS or problem[b] == "."):
                if problem[b] == ".":
                    if has_dot:
                        raise E.MalformedNumberError(
                            f"More than one '.' in the number at position {start}", code="3008")
                    has_dot = True
                b += 1

            str_number = problem[start:b]
            if str_number == ".":
                raise E.MalformedNumberError(
                    f"Number without digits at position {start}", code="3031")
            tokens.append(Token(NUMBER, str_number, start))
            continue

        # --- Identifiers: function and constant names ---
        elif current_char in LETTERS:
            while b < len(problem) and problem[b] in LETTERS:
                b += 1
            tokens.append(Token(IDENTIFIER, problem[start:b], start))
            continue

        # --- Operators ---
        elif current_char in Operations:
            tokens.append(Token(OPERATOR, current_char, start))

        # --- Parentheses and comma ---
        elif current_char in PUNCTUATION:
            tokens.append(Token(PUNCTUATION[current_char], current_char, start))

        else:
            raise E.InvalidCharacterError(
                f"Invalid character {current_char!r} at position {start}", code="3030")

        b += 1

    return tokens


# -----------------------------
# IEEE-754 helpers
# -----------------------------

def divide(dividend, divisor):
    """x/0 is a signed infinity and 0/0 is NaN instead of ZeroDivisionError."""
    if divisor == 0:
        if dividend == 0 or math.isnan(dividend):
            return NAN
        return math.copysign(INF, dividend) * math.copysign(1.0, divisor)
    return dividend / divisor


def _is_odd_integer(value):
    return value.is_integer() and value % 2 == 1


def power(base, exponent):
    try:
        return math.pow(base, exponent)
    except OverflowError:
        if base < 0 and _is_odd_integer(exponent):
            return -INF
        return INF
    except ValueError:
        # 0 to a negative power, or a negative base with a fractional exponent
        if base == 0:
            if _is_odd_integer(exponent):
                return math.copysign(INF, base)
            return INF
        return NAN


def remainder(dividend, divisor):
    """Floating-point remainder, sign of the dividend (C fmod)."""
    try:
        return math.fmod(dividend, divisor)
    except ValueError:
        return NAN


# -----------------------------
# AST node types
# -----------------------------

class Literal:
    """AST node for a numeric literal."""
    def __init__(self, value):
        self.value = float(value)
        self.depth = 1

    def evaluate(self):
        return self.value

    def __repr__(self):
        return f"Literal({self.value!r})"


class Constant:
    """AST node for a named constant, looked up when evaluated."""
    def __init__(self, name):
        self.name = name
        self.depth = 1

    def evaluate(self):
        # The parser only builds Constant nodes for known names,
        # so a KeyError here is a bug rather than bad input.
        return ScientificEngine.CONSTANTS[self.name]

    def __repr__(self):
        return f"Constant({self.name!r})"


class UnaryMinus:
    def __init__(self, operand):
        self.operand = operand
        self.depth = operand.depth + 1

    def evaluate(self):
        return -self.operand.evaluate()

    def __repr__(self):
        return f"UnaryMinus({self.operand})"


class BinOp:
    """AST node for a binary operation: left <operator> right.

    A chain like 1+2-3*4 hangs off the left side of the tree. evaluate()
    walks that left spine in a loop, so `depth` only counts what is
    evaluated recursively: the bottom of the spine and each right operand.
    """
    def __init__(self, left, operator, right):
        self.left = left
        self.operator = operator
        self.right = right
        if operator in LEFT_ASSOCIATIVE and isinstance(left, BinOp) and left.operator in LEFT_ASSOCIATIVE:
            self.depth = max(left.depth, right.depth + 1)
        else:
            self.depth = max(left.depth, right.depth) + 1

    def apply(self, left_value, right_value):
        if self.operator == '+':
            return left_value + right_value
        elif self.operator == '-':
            return left_value - right_value
        elif self.operator == '*':
            return left_value * right_value
        elif self.operator == '/':
            return divide(left_value, right_value)
        elif self.operator == '^':
            return power(left_value, right_value)
        elif self.operator == '%':
            return remainder(left_value, right_value)
        else:
            raise LookupError(f"Unknown operator: {self.operator}")

    def evaluate(self):
        """Evaluate both subtrees and apply the binary operator."""
        if self.operator not in LEFT_ASSOCIATIVE:
            return self.apply(self.left.evaluate(), self.right.evaluate())

        spine = []
        node = self
        while isinstance(node, BinOp) and node.operator in LEFT_ASSOCIATIVE:
            spine.append(node)
            node = node.left

        value = node.evaluate()
        for binop in reversed(spine):
            value = binop.apply(value, binop.right.evaluate())
        return value

    def __repr__(self):
        return f"BinOp({self.operator!r}, left={self.left}, right={self.right})"


class Call:
    """AST node for a single-argument function call."""
    def __init__(self, name, argument):
        self.name = name
        self.argument = argument
        self.depth = argument.depth + 1

    def evaluate(self):
        function = ScientificEngine.FUNCTIONS[self.name]
        return function(self.argument.evaluate())

    def __repr__(self):
        return f"Call({self.name!r}, {self.argument})"


# -----------------------------
# Parser (recursive descent)
# -----------------------------

def _is_operator(token, symbols):
    return token.kind == OPERATOR and token.text in symbols


def parse(tokens):
    """Parse a token list into an AST.

    Implements precedence via nested functions:
    factor → unary → power → term → sum. '^' recurses on its right-hand side,
    so 2^3^2 groups as 2^(3^2). Returns None for an empty token list.
    """
    if not tokens:
        return None

    tokens = deque(tokens)
    nesting = 0

    def enter():
        nonlocal nesting
        nesting += 1
        if nesting > MAX_NESTING:
            raise E.SyntaxError("Expression is nested too deeply.", code="3034")

    def leave():
        nonlocal nesting
        nesting -= 1

    def build(node):
        if node.depth > MAX_TREE_DEPTH:
            raise E.SyntaxError("Expression is nested too deeply.", code="3034")
        return node

    def pop_operator():
        """Take a binary operator; something has to follow it."""
        operator = tokens.popleft()
        if not tokens:
            raise E.SyntaxError(
                f"Missing Number after '{operator.text}' at position {operator.position}", code="3029")
        return operator.text

    def expect_closing(opening, function=None):
        if not tokens:
            if function:
                raise E.UnmatchedParenthesisError(
                    f"Missing ')' after function '{function}'", code="3217")
            raise E.UnmatchedParenthesisError(
                f"Missing ')' for '(' at position {opening.position}", code="3009")
        token = tokens.popleft()
        if token.kind != RPAREN:
            raise E.SyntaxError(
                f"Unexpected token '{token.text}' at position {token.position}, expected ')'", code="3011")

    def parse_identifier(token):
        """Function call when followed by '(', constant otherwise."""
        name = token.text

        if tokens and tokens[0].kind == LPAREN:
            if ScientificEngine.isFunction(name):
                opening = tokens.popleft()
                enter()
                argument = parse_sum()
                expect_closing(opening, function=name)
                leave()
                return build(Call(name, argument))
            if ScientificEngine.isConstant(name):
                raise E.SyntaxError(f"Constant '{name}' cannot be called", code="3036")
            raise E.UnknownIdentifierError(name)

        if ScientificEngine.isConstant(name):
            return Constant(name)
        if ScientificEngine.isFunction(name):
            raise E.SyntaxError(f"Missing '(' after function '{name}'", code="3023")
        raise E.UnknownIdentifierError(name)

    def parse_factor():
        """Numbers, identifiers and sub-expressions in '()'."""
        if not tokens:
            raise E.SyntaxError("Missing Number.", code="3027")
        token = tokens.popleft()

        if token.kind == NUMBER:
            return Literal(float(token.text))

        # Parenthesized sub-expression
        elif token.kind == LPAREN:
            enter()
            subtree = parse_sum()
            expect_closing(token)
            leave()
            return subtree

        elif token.kind == IDENTIFIER:
            return parse_identifier(token)

        else:
            raise E.SyntaxError(
                f"Unexpected token '{token.text}' at position {token.position}", code="3011")

    def parse_unary():
        """Leading '-' (unary plus is not part of the grammar)."""
        if tokens and _is_operator(tokens[0], "-"):
            tokens.popleft()
            enter()
            operand = parse_unary()
            leave()
            return build(UnaryMinus(operand))
        return parse_factor()

    def parse_power():
        """Exponentiation '^', right-associative."""
        base = parse_unary()
        if tokens and _is_operator(tokens[0], "^"):
            operator = pop_operator()
            enter()
            exponent = parse_power()
            leave()
            return build(BinOp(base, operator, exponent))
        return base

    def parse_term():
        """Multiplication, division and remainder."""
        current_tree = parse_power()
        while tokens and _is_operator(tokens[0], "*/%"):
            operator = pop_operator()
            right_side = parse_power()
            current_tree = build(BinOp(current_tree, operator, right_side))
        return current_tree

    def parse_sum():
        """Addition and subtraction."""
        current_tree = parse_term()
        while tokens and _is_operator(tokens[0], "+-"):
            operator = pop_operator()
            right_side = parse_term()
            current_tree = build(BinOp(current_tree, operator, right_side))
        return current_tree

    final_tree = parse_sum()

    if tokens:
        token = tokens[0]
        raise E.TrailingInputError(
            f"Unexpected '{token.text}' at position {token.position} after the expression", code="3033")

    return final_tree


# -----------------------------
# Evaluator
# -----------------------------

def evaluate_tree(tree):
    """Evaluate a parsed tree; an empty tree is 0. NaN or infinity is an error."""
    if tree is None:
        return 0.0
    result = tree.evaluate()
    if math.isnan(result) or math.isinf(result):
        raise E.MathDomainError(f"Result is not a finite number: {result}", code="3035")
    return result


# -----------------------------
# Result formatting
# -----------------------------

def format_result(value):
    """Render a finite float as plain decimal text.

    Uses the shortest digits that round-trip (repr) but never exponent
    notation, since '1e+16' would not tokenize back into the same number.
    Integral values drop the trailing '.0'.
    """
    if math.isnan(value) or math.isinf(value):
        raise E.MathDomainError(f"Result is not a finite number: {value}", code="3035")
    if value == 0:
        return "0"
    rendered = Decimal(repr(value)).normalize()
    return format(rendered, "f")


# -----------------------------
# Public entry points
# -----------------------------

def evaluate(problem):
    """Main API: sanitize → validate → tokenize → parse → evaluate.

    Returns a finite float or raises a MathError subclass carrying the raw
    input in `equation`.
    """
    try:
        sanitized = sanitize(problem)
        validate(sanitized)
        tokens = tokenize(sanitized)
        logger.debug("Tokens: %s", tokens)
        final_tree = parse(tokens)
        logger.debug("Final AST: depth %d", final_tree.depth if final_tree else 0)
        return evaluate_tree(final_tree)

    # Re-raise our domain errors after attaching the source equation
    except E.MathError as e:
        e.equation = problem
        raise


def calculate(problem):
    """Evaluate and render: the text the display shows for `problem`."""
    return format_result(evaluate(problem))
