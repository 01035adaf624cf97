"""
Tests for the front of the pipeline: sanitizer, validator and tokenizer.
"""

import pytest

from Calculator import MathEngine
from Calculator import error as E
from Calculator.MathEngine import Token, NUMBER, IDENTIFIER, OPERATOR, LPAREN, RPAREN, COMMA


@pytest.mark.unit
class TestSanitize:
    def test_replaces_operator_glyphs(self):
        assert MathEngine.sanitize("6 × 3 ÷ 2 − 1") == "6*3/2-1"

    def test_strips_all_whitespace(self):
        assert MathEngine.sanitize("\t1 +\n 2 ") == "1+2"

    def test_empty_and_none(self):
        assert MathEngine.sanitize("") == ""
        assert MathEngine.sanitize(None) == ""

    def test_leaves_other_characters_alone(self):
        assert MathEngine.sanitize("90°") == "90°"


@pytest.mark.unit
class TestValidate:
    def test_accepts_full_alphabet(self):
        MathEngine.validate("0123456789+-*/^().,%abcXYZ")

    @pytest.mark.parametrize("text", ["90°", "2ä", "1\x00", "2&3", "π", "2=2", "x_1"])
    def test_rejects_characters_outside_alphabet(self, text):
        with pytest.raises(E.InvalidCharacterError) as excinfo:
            MathEngine.validate(text)
        assert excinfo.value.code == "3030"

    def test_evaluate_rejects_before_parsing(self):
        # '(' is unmatched too, but the character check comes first
        with pytest.raises(E.InvalidCharacterError):
            MathEngine.evaluate("(sin(90°)")


@pytest.mark.unit
class TestTokenize:
    def test_numbers_operators_identifiers(self):
        assert MathEngine.tokenize("12.5+pie") == [
            Token(NUMBER, "12.5", 0),
            Token(OPERATOR, "+", 4),
            Token(IDENTIFIER, "pie", 5),
        ]

    def test_punctuation(self):
        kinds = [token.kind for token in MathEngine.tokenize("sin(30),")]
        assert kinds == [IDENTIFIER, LPAREN, NUMBER, RPAREN, COMMA]

    def test_every_operator_is_its_own_token(self):
        tokens = MathEngine.tokenize("+-*/^%")
        assert [token.text for token in tokens] == list("+-*/^%")
        assert all(token.kind == OPERATOR for token in tokens)

    def test_identifiers_are_maximal_letter_runs(self):
        tokens = MathEngine.tokenize("pie")
        assert tokens == [Token(IDENTIFIER, "pie", 0)]

    def test_number_ends_at_letter(self):
        tokens = MathEngine.tokenize("2pi")
        assert tokens == [Token(NUMBER, "2", 0), Token(IDENTIFIER, "pi", 1)]

    @pytest.mark.parametrize("text", [".5", "5.", "0.25", "007"])
    def test_single_dot_numbers(self, text):
        assert MathEngine.tokenize(text) == [Token(NUMBER, text, 0)]

    def test_two_dots_is_malformed(self):
        with pytest.raises(E.MalformedNumberError) as excinfo:
            MathEngine.tokenize("1.2.3")
        assert excinfo.value.code == "3008"

    @pytest.mark.parametrize("text", [".", "2+.", "(.)"])
    def test_number_without_digits_is_malformed(self, text):
        with pytest.raises(E.MalformedNumberError) as excinfo:
            MathEngine.tokenize(text)
        assert excinfo.value.code == "3031"

    def test_empty_input(self):
        assert MathEngine.tokenize("") == []

    def test_no_semantic_resolution(self):
        # Unknown names are the parser's business
        assert MathEngine.tokenize("foo") == [Token(IDENTIFIER, "foo", 0)]
