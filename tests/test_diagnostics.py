from diagnostics import line_error, report, token_error
from models import Token, TokenType


class TestDiagnostics:
    def test_report(self):
        assert report(7, " at 'x'", "Bad.") == "[line 7] Error at 'x': Bad."

    def test_line_error_has_no_location(self):
        assert line_error(3, "Unexpected character.") == "[line 3] Error: Unexpected character."

    def test_token_error_at_end(self):
        eof = Token(type=TokenType.EOF, lexeme="", line=2)
        assert token_error(eof, "Expect expression.") == "[line 2] Error at end: Expect expression."

    def test_token_error_quotes_lexeme(self):
        tok = Token(type=TokenType.BANG_EQUAL, lexeme="!=", line=1)
        assert token_error(tok, "Missing left-hand operand.") == \
            "[line 1] Error at '!=': Missing left-hand operand."
