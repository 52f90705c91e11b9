from fastapi import FastAPI
from pydantic import BaseModel
from typing import Iterator, List, Tuple
from models import Token, TokenType, ApiOk
from diagnostics import line_error
import logging, re

logger = logging.getLogger(__name__)

app = FastAPI(title="lexer-svc")

@app.get("/healthz")
def healthz():
    return {"ok":True}

KEYWORDS = ("and","class","else","false","fun","for","if","nil",
            "or","print","return","super","this","true","var","while")

# priority order: first alternative that matches wins
TOKENS = [
    ("LINE_COM", r"//[^\n]*"),
    ("BLOCK_COM", r"/\*[\s\S]*?\*/"),
    ("OPEN_COM", r"/\*[\s\S]*"),
    ("KW", r"(?:%s)(?![A-Za-z0-9_])" % "|".join(KEYWORDS)),
    ("STRING", r'"[^"]*"'),
    ("OPEN_STRING", r'"[^"]*'),
    ("NUMBER", r"[0-9]+(?:\.[0-9]+)?"),
    ("IDENT", r"[A-Za-z_][A-Za-z0-9_]*"),
    ("OP", r"!=|==|>=|<=|[(){},.\-+;/*!=<>?:]"),
    ("WS", r"[ \t\r\n]+"),
]
MASTER = re.compile("|".join(f"(?P<T{i}>{p})" for i,(_,p) in enumerate(TOKENS)))

OPERATORS = {
    "(":TokenType.LEFT_PAREN, ")":TokenType.RIGHT_PAREN,
    "{":TokenType.LEFT_BRACE, "}":TokenType.RIGHT_BRACE,
    ",":TokenType.COMMA, ".":TokenType.DOT, "-":TokenType.MINUS, "+":TokenType.PLUS,
    ";":TokenType.SEMICOLON, "/":TokenType.SLASH, "*":TokenType.STAR,
    "!":TokenType.BANG, "!=":TokenType.BANG_EQUAL,
    "=":TokenType.EQUAL, "==":TokenType.EQUAL_EQUAL,
    ">":TokenType.GREATER, ">=":TokenType.GREATER_EQUAL,
    "<":TokenType.LESS, "<=":TokenType.LESS_EQUAL,
    "?":TokenType.QUESTION, ":":TokenType.COLON,
}

def classify(name, text):
    if name == "KW": return TokenType(text.upper()), None
    if name == "STRING": return TokenType.STRING, text[1:-1]
    if name == "NUMBER": return TokenType.NUMBER, float(text)
    if name == "IDENT": return TokenType.IDENTIFIER, None
    return OPERATORS[text], None

def iter_tokens(source: str, errors: List[str]) -> Iterator[Token]:
    """Yield the tokens of ``source`` in order, ending with a single EOF.

    Lexical errors are appended to ``errors`` as they are found and the
    offending span is skipped.  Each call starts a fresh scan.
    """
    i=0; line=1
    while i < len(source):
        m=MASTER.match(source,i)
        if not m:
            errors.append(line_error(line, "Unexpected character."))
            i+=1
            continue
        text=m.group(); i=m.end()
        line += text.count("\n")
        name,_=TOKENS[int(m.lastgroup[1:])]
        if name in ("WS","LINE_COM","BLOCK_COM"): continue
        if name == "OPEN_COM":
            errors.append(line_error(line, "Unterminated multiline comment.")); continue
        if name == "OPEN_STRING":
            errors.append(line_error(line, "Unterminated string.")); continue
        ttype,literal=classify(name,text)
        yield Token(type=ttype, lexeme=text, literal=literal, line=line)
    yield Token(type=TokenType.EOF, lexeme="", line=line)

def scan(source: str) -> Tuple[List[Token], List[str]]:
    errors: List[str]=[]
    tokens=list(iter_tokens(source, errors))
    logger.debug("scanned %d tokens, %d errors", len(tokens), len(errors))
    return tokens, errors

class LexReq(BaseModel):
    source: str

@app.post("/lex")
def lex(req: LexReq):
    tokens,errors=scan(req.source)
    return ApiOk(data={"tokens":[t.model_dump(mode="json") for t in tokens],"errors":errors})
