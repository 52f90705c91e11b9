from fastapi import FastAPI
from pydantic import BaseModel
from typing import List, Optional, Tuple
from models import Token, TokenType, ApiOk, ApiErr
from ast_nodes import Expr, Literal, Grouping, Unary, Binary, Conditional
from diagnostics import token_error
import logging, os, requests

logger = logging.getLogger(__name__)

app = FastAPI(title="parser-svc")
PRINT_URL = os.getenv("PRINT_URL", "http://printer-svc:8000")
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "5"))

@app.get("/healthz")
def healthz():
    return {"ok": True}

class ParseError(Exception):
    """Unwinds one parse() call after a hard failure has been recorded."""

# tokens that start a declaration or statement, used by synchronize()
STATEMENT_START = (
    TokenType.CLASS, TokenType.FUN, TokenType.VAR, TokenType.FOR,
    TokenType.IF, TokenType.WHILE, TokenType.PRINT, TokenType.RETURN,
)

EQUALITY = (TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL)
COMPARISON = (TokenType.GREATER, TokenType.GREATER_EQUAL, TokenType.LESS, TokenType.LESS_EQUAL)
TERM = (TokenType.MINUS, TokenType.PLUS)
FACTOR = (TokenType.SLASH, TokenType.STAR)

def _binary(left, operator, right):
    if left is None or right is None: return None
    return Binary(left=left, operator=operator, right=right)

class Parser:
    """Recursive-descent parser for one expression.

    Precedence, lowest first: comma, conditional, equality, comparison,
    term, factor, unary, primary.  Errors are collected in ``errors``.
    """

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.current = 0
        self.errors: List[str] = []
        self.error_lines: List[int] = []

    def parse(self) -> Optional[Expr]:
        try:
            return self.expression()
        except ParseError:
            return None

    def expression(self):
        return self.comma()

    def comma(self):
        expr = self.conditional()
        while self.match(TokenType.COMMA):
            operator = self.previous()
            right = self.expression()
            expr = _binary(expr, operator, right)
        return expr

    def conditional(self):
        expr = self.equality()
        if self.match(TokenType.QUESTION):
            then_branch = self.equality()
            self.consume(TokenType.COLON, "Expect : after then branch of conditional expression.")
            else_branch = self.conditional()
            if None in (expr, then_branch, else_branch): return None
            expr = Conditional(condition=expr, then_branch=then_branch, else_branch=else_branch)
        return expr

    def equality(self):
        return self._left_assoc(self.comparison, EQUALITY)

    def comparison(self):
        return self._left_assoc(self.term, COMPARISON)

    def term(self):
        return self._left_assoc(self.factor, TERM)

    def factor(self):
        return self._left_assoc(self.unary, FACTOR)

    def _left_assoc(self, operand, kinds):
        expr = operand()
        while self.match(*kinds):
            operator = self.previous()
            right = operand()
            expr = _binary(expr, operator, right)
        return expr

    def unary(self):
        if self.match(TokenType.BANG, TokenType.MINUS):
            operator = self.previous()
            right = self.unary()
            if right is None: return None
            return Unary(operator=operator, right=right)
        return self.primary()

    def primary(self):
        if self.match(TokenType.FALSE): return Literal(value=False)
        if self.match(TokenType.TRUE): return Literal(value=True)
        if self.match(TokenType.NIL): return Literal(value=None)
        if self.match(TokenType.NUMBER, TokenType.STRING):
            return Literal(value=self.previous().literal)
        if self.match(TokenType.LEFT_PAREN):
            expr = self.expression()
            self.consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
            if expr is None: return None
            return Grouping(expression=expr)

        # error productions: a binary operator with no left operand.
        # MINUS is left out, it is also a unary prefix.
        for kinds, operand in ((EQUALITY, self.equality), (COMPARISON, self.comparison),
                               ((TokenType.PLUS,), self.term), (FACTOR, self.factor)):
            if self.match(*kinds):
                self.report(self.previous(), "Missing left-hand operand.")
                operand()
                return None

        raise self.error(self.peek(), "Expect expression.")

    def synchronize(self):
        """Skip to the start of the next statement after a hard failure."""
        self.advance()
        while not self.is_at_end():
            if self.previous().type == TokenType.SEMICOLON: return
            if self.peek().type in STATEMENT_START: return
            self.advance()

    # helpers
    def consume(self, kind, message):
        if self.check(kind): return self.advance()
        raise self.error(self.peek(), message)

    def report(self, token, message):
        self.errors.append(token_error(token, message))
        self.error_lines.append(token.line)

    def error(self, token, message):
        self.report(token, message)
        return ParseError(message)

    def match(self, *kinds):
        if self.peek().type in kinds and not self.is_at_end():
            self.advance()
            return True
        return False

    def check(self, kind):
        if self.is_at_end(): return False
        return self.peek().type == kind

    def advance(self):
        if not self.is_at_end(): self.current += 1
        return self.previous()

    def is_at_end(self):
        return self.peek().type == TokenType.EOF

    def peek(self):
        return self.tokens[self.current]

    def previous(self):
        return self.tokens[self.current - 1]

def _run(tokens: List[Token]) -> Tuple[Optional[Expr], Parser]:
    p = Parser(tokens)
    expr = p.parse()
    logger.debug("parsed %d tokens: %s, %d errors",
                 len(tokens), "ok" if expr is not None else "no expression", len(p.errors))
    return expr, p

def parse(tokens: List[Token]) -> Tuple[Optional[Expr], List[str]]:
    expr, p = _run(tokens)
    return expr, p.errors

def _terminated(tokens: List[Token]) -> List[Token]:
    if tokens and tokens[-1].type == TokenType.EOF: return tokens
    line = tokens[-1].line if tokens else 1
    return tokens + [Token(type=TokenType.EOF, lexeme="", line=line)]

def _failure(p: Parser) -> ApiErr:
    return ApiErr(phase="parse", code="E_PARSE",
                  line=p.error_lines[0] if p.error_lines else None,
                  msg=p.errors[0] if p.errors else "No expression.", errors=p.errors)

class ParseReq(BaseModel):
    tokens: List[Token]

@app.post("/parse")
def parse_api(req: ParseReq):
    expr, p = _run(_terminated(req.tokens))
    if expr is None:
        return _failure(p)
    return ApiOk(data={"ast": expr.model_dump(mode="json")})

class CompileReq(BaseModel):
    tokens: List[Token]

@app.post("/compile")
def compile_api(req: CompileReq):
    expr, p = _run(_terminated(req.tokens))
    if expr is None:
        return _failure(p)
    try:
        # forward AST to printer
        r = requests.post(f"{PRINT_URL}/print", json={"ast": expr.model_dump(mode="json")},
                          timeout=HTTP_TIMEOUT)
        r.raise_for_status()
        # printer returns ApiOk/ApiErr-shape JSON already
        return r.json()
    except requests.RequestException as e:
        logger.warning("printer unreachable at %s: %s", PRINT_URL, e)
        return ApiErr(phase="parse", code="E_FORWARD_PRINTER",
                      msg=f"Failed to contact printer: {e}")
