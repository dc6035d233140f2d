"""Tests for the precedence-climbing parser."""

import pytest

from calclib.errors import NumberParseError, UnknownCharacterError
from calclib.parser import Infix, Number, Parser, Token, TokenType


class TestLiterals:
    """Test parsing of single literals."""

    def test_empty_input(self, parser):
        """Test empty input parses to nothing."""
        assert parser.parse("") is None

    @pytest.mark.parametrize("text,value", [
        ("5", 5),
        ("42", 42),
        ("0", 0),
        ("1234567890", 1234567890),
    ])
    def test_simple_literal(self, parser, text, value):
        """Test a literal parses to a Number node."""
        assert parser.parse(text) == Number(value)

    @pytest.mark.parametrize("text,value", [
        ("-5", 5),
        ("-42", 42),
        ("-1234567890", 1234567890),
    ])
    def test_negative_literal(self, parser, ast, text, value):
        """Test a leading minus parses to a Prefix node."""
        assert parser.parse(text) == ast.neg(value)


class TestIncompleteInput:
    """Test that partial input is reported as nothing, not as an error."""

    @pytest.mark.parametrize("text", [
        "-",
        "(399",
        "*",
        "3-",
        "-5+",
        ")",
        "3)",
        "()",
        "3(",
        "2*",
        "5!3",
        "50%",
    ])
    def test_incomplete(self, parser, text):
        """Test incomplete or unbalanced input parses to None."""
        assert parser.parse(text) is None


class TestBinaryExpressions:
    """Test infix operators and precedence."""

    @pytest.mark.parametrize("text,op", [
        ("15+3", "+"),
        ("15-3", "-"),
        ("15*3", "*"),
        ("15/3", "/"),
        ("15^3", "^"),
        ("15%3", "%"),
    ])
    def test_simple_infix(self, parser, ast, text, op):
        """Test a single binary operation."""
        assert parser.parse(text) == ast.infix(15, op, 3)

    def test_multiplication_binds_tighter(self, parser, ast):
        """Test 1+2*3 groups the product."""
        assert parser.parse("1+2*3") == ast.infix(1, "+", ast.infix(2, "*", 3))

    def test_left_associative(self, parser, ast):
        """Test 10-4-3 groups to the left."""
        assert parser.parse("10-4-3") == ast.infix(ast.infix(10, "-", 4), "-", 3)

    def test_grouping(self, parser, ast):
        """Test parentheses override precedence."""
        assert parser.parse("5*(3-1)") == ast.infix(5, "*", ast.infix(3, "-", 1))

    def test_nested_grouping(self, parser, ast):
        """Test a longer mixed expression."""
        expected = ast.infix(
            ast.infix(
                5,
                "*",
                ast.infix(ast.infix(3, "-", ast.infix(1, "*", 4)), "+", 8),
            ),
            "/",
            2,
        )
        assert parser.parse("5*(3-1*4+8)/2") == expected

    def test_grouping_on_the_right(self, parser, ast):
        """Test 42-7*(2+3)."""
        expected = ast.infix(42, "-", ast.infix(7, "*", ast.infix(2, "+", 3)))
        assert parser.parse("42-7*(2+3)") == expected

    def test_redundant_parentheses(self, parser):
        """Test (((1))) is just the literal."""
        assert parser.parse("(((1)))") == Number(1)


class TestImplicitMultiplication:
    """Test juxtaposition with a parenthesised group."""

    def test_number_before_group(self, parser):
        """Test 5(3-1) parses exactly like 5*(3-1)."""
        assert parser.parse("5(3-1)") == parser.parse("5*(3-1)")

    def test_inserted_operator_is_multiply(self, parser):
        """Test the inserted operator is a MULTIPLY token."""
        node = parser.parse("5(3-1)")
        assert isinstance(node, Infix)
        assert node.operator == Token(TokenType.MULTIPLY)

    def test_group_before_group(self, parser, ast):
        """Test (2)(3) multiplies the groups."""
        assert parser.parse("(2)(3)") == ast.infix(2, "*", 3)


class TestPrefixAndPostfix:
    """Test negation and factorial."""

    def test_negation_binds_tighter_than_addition(self, parser, ast):
        """Test -4+7 negates only the 4."""
        assert parser.parse("-4+7") == ast.infix(ast.neg(4), "+", 7)

    def test_double_negation(self, parser, ast):
        """Test -(-3)."""
        assert parser.parse("-(-3)") == ast.neg(ast.neg(3))

    def test_negated_group(self, parser, ast):
        """Test -(2+3)."""
        assert parser.parse("-(2+3)") == ast.neg(ast.infix(2, "+", 3))

    def test_subtracting_a_negative(self, parser, ast):
        """Test 2--3."""
        assert parser.parse("2--3") == ast.infix(2, "-", ast.neg(3))

    def test_factorial(self, parser, ast):
        """Test 5!."""
        assert parser.parse("5!") == ast.fact(5)

    def test_factorial_of_negative(self, parser, ast):
        """Test -5! applies the factorial to the negated literal."""
        assert parser.parse("-5!") == ast.fact(ast.neg(5))

    def test_factorial_inside_sum(self, parser, ast):
        """Test 2+3! applies the factorial to 3 only."""
        assert parser.parse("2+3!") == ast.infix(2, "+", ast.fact(3))

    def test_factorial_then_operator(self, parser, ast):
        """Test 5!+2."""
        assert parser.parse("5!+2") == ast.infix(ast.fact(5), "+", 2)

    def test_repeated_factorial(self, parser, ast):
        """Test 3!!."""
        assert parser.parse("3!!") == ast.fact(ast.fact(3))


class TestParserReuse:
    """Test that parser instances carry no state between calls."""

    def test_same_result_from_fresh_instances(self):
        """Test parsing twice with fresh parsers gives equal trees."""
        text = "5*(3-1*4+8)/2"
        assert Parser().parse(text) == Parser().parse(text)

    def test_reuse_after_incomplete_input(self, parser):
        """Test an incomplete parse does not affect the next one."""
        assert parser.parse("(399") is None
        assert parser.parse("2+3") == parser.parse("2+3")
        assert parser.parse("2+3") is not None


class TestLexErrors:
    """Test that lexing errors propagate."""

    def test_unknown_character(self, parser):
        """Test an unknown character raises."""
        with pytest.raises(UnknownCharacterError):
            parser.parse("2+a")

    def test_bad_number(self, parser):
        """Test a malformed number raises."""
        with pytest.raises(NumberParseError):
            parser.parse("1..2+3")

    @pytest.mark.parametrize("text", ["5)x", "5!3a", "(1)2 ", "2(3)4@"])
    def test_unknown_character_after_early_stop(self, parser, text):
        """Test characters past where parsing stopped are still lexed."""
        with pytest.raises(UnknownCharacterError):
            parser.parse(text)

    def test_bad_number_after_early_stop(self, parser):
        """Test a malformed number past an unmatched parenthesis raises."""
        with pytest.raises(NumberParseError):
            parser.parse("3)1..2")

    def test_incomplete_input_still_none(self, parser):
        """Test fully lexable incomplete input is not an error."""
        assert parser.parse("5)3") is None
