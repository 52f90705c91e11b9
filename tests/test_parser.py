"""Parser tests, checked through the printer's prefix rendering."""

import pytest

from ast_nodes import Binary, Grouping, Literal
from lexer import scan
from models import TokenType
from parser import Parser, parse
from printer import print_expr


def show(source):
    tokens, _ = scan(source)
    expr, errors = parse(tokens)
    return print_expr(expr), errors


class TestPrecedence:
    @pytest.mark.parametrize("source,expected", [
        ("-123 * (45.67)", "(* (- 123) (group 45.67))"),
        ("-123 - 1 * 10", "(- (- 123) (* 1 10))"),
        ("-(123 - 1) / 10", "(/ (- (group (- 123 1))) 10)"),
        ('"a" == "b", nil / 2', "(, (== a b) (/ nil 2))"),
        ('"a" == "b" ? nil : 2', "(?(== a b) nil 2)"),
        ("1 - 2 - 3", "(- (- 1 2) 3)"),
        ("8 / 4 * 2", "(* (/ 8 4) 2)"),
        ("1 < 2 == 3 >= 4", "(== (< 1 2) (>= 3 4))"),
        ("1 + 2 > 3 * 4", "(> (+ 1 2) (* 3 4))"),
        ("!!true", "(! (! true))"),
        ("-false", "(- false)"),
        ("1 != 2 == false", "(== (!= 1 2) false)"),
    ])
    def test_rendering(self, source, expected):
        assert show(source) == (expected, [])

    def test_comma_reenters_full_expression(self):
        assert show("1, 2, 3") == ("(, 1 (, 2 3))", [])

    def test_conditional_is_right_associative(self):
        assert show("true ? 1 : false ? 2 : 3") == ("(?true 1 (?false 2 3))", [])

    def test_nested_condition_is_rendered_recursively(self):
        assert show("(true ? 1 : 2) ? 3 : 4") == ("(?(group (?true 1 2)) 3 4)", [])

    def test_conditional_binds_looser_than_equality_tighter_than_comma(self):
        assert show("1 == 1 ? 2 : 3, 4") == ("(, (?(== 1 1) 2 3) 4)", [])

    def test_tree_shape(self):
        tokens, _ = scan("(1) + 2")
        expr, errors = parse(tokens)
        assert errors == []
        assert isinstance(expr, Binary)
        assert expr.left == Grouping(expression=Literal(value=1.0))
        assert expr.operator.type == TokenType.PLUS
        assert expr.right == Literal(value=2.0)

    def test_only_one_expression_is_parsed(self):
        assert show("1 2") == ("1", [])


class TestHardFailures:
    def test_missing_colon(self):
        assert show("true ? nil") == (
            None, ["[line 1] Error at end: Expect : after then branch of conditional expression."])

    def test_missing_right_paren(self):
        assert show("(true") == (None, ["[line 1] Error at end: Expect ')' after expression."])

    def test_missing_right_paren_points_at_token(self):
        assert show("(1 2)") == (None, ["[line 1] Error at '2': Expect ')' after expression."])

    def test_empty_input(self):
        assert show("") == (None, ["[line 1] Error at end: Expect expression."])

    def test_identifier_is_not_an_expression(self):
        assert show("foo") == (None, ["[line 1] Error at 'foo': Expect expression."])

    def test_dangling_operator_reports_line_of_end(self):
        assert show("1 +\n\n") == (None, ["[line 3] Error at end: Expect expression."])

    def test_abort_discards_whole_tree(self):
        expr, errors = show("1 + 2 * (3")
        assert expr is None
        assert len(errors) == 1


class TestErrorProductions:
    @pytest.mark.parametrize("op", ["!=", "==", ">", ">=", "<", "<=", "+", "/", "*"])
    def test_missing_left_hand_operand(self, op):
        assert show(f"{op} false") == (None, [f"[line 1] Error at '{op}': Missing left-hand operand."])

    def test_minus_is_a_prefix_not_an_error(self):
        assert show("- false") == ("(- false)", [])

    def test_right_operand_is_consumed_at_its_level(self):
        # the whole "1 == 2" chain belongs to the discarded operand
        assert show("== 1 == 2") == (None, ["[line 1] Error at '==': Missing left-hand operand."])

    def test_recovery_keeps_parsing_the_enclosing_rule(self):
        expr, errors = show("1 + != 2, (3")
        assert expr is None
        assert errors == [
            "[line 1] Error at '!=': Missing left-hand operand.",
            "[line 1] Error at end: Expect ')' after expression.",
        ]

    def test_missing_operand_inside_group(self):
        assert show("(* 2) + 1") == (None, ["[line 1] Error at '*': Missing left-hand operand."])

    def test_missing_operand_in_conditional_branch(self):
        assert show("true ? < 1 : 2") == (None, ["[line 1] Error at '<': Missing left-hand operand."])

    def test_errors_accumulate_in_order(self):
        _, errors = show("+ 1, * 2")
        assert errors == [
            "[line 1] Error at '+': Missing left-hand operand.",
            "[line 1] Error at '*': Missing left-hand operand.",
        ]


class TestSynchronize:
    def parser(self, source):
        tokens, _ = scan(source)
        return Parser(tokens)

    def test_stops_after_semicolon(self):
        p = self.parser("oops ; 1")
        p.synchronize()
        assert p.previous().type == TokenType.SEMICOLON
        assert p.peek().lexeme == "1"

    @pytest.mark.parametrize("keyword", ["class", "fun", "var", "for", "if", "while", "print", "return"])
    def test_stops_before_statement_keyword(self, keyword):
        p = self.parser(f"a b {keyword} x")
        p.synchronize()
        assert p.peek().lexeme == keyword

    def test_skips_the_offending_token_first(self):
        p = self.parser("var var x")
        p.synchronize()
        assert p.current == 1
        assert p.peek().type == TokenType.VAR

    def test_stops_at_end(self):
        p = self.parser("a b c")
        p.synchronize()
        assert p.is_at_end()

    def test_parse_does_not_synchronize(self):
        p = self.parser("(1; 2")
        assert p.parse() is None
        assert p.peek().type == TokenType.SEMICOLON
