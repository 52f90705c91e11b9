from enum import Enum
from pydantic import BaseModel, ConfigDict
from typing import Optional, Any, Literal, List, Union

class TokenType(str, Enum):
    # single-character tokens
    LEFT_PAREN = "LEFT_PAREN"
    RIGHT_PAREN = "RIGHT_PAREN"
    LEFT_BRACE = "LEFT_BRACE"
    RIGHT_BRACE = "RIGHT_BRACE"
    COMMA = "COMMA"
    DOT = "DOT"
    MINUS = "MINUS"
    PLUS = "PLUS"
    SEMICOLON = "SEMICOLON"
    SLASH = "SLASH"
    STAR = "STAR"

    # one or two character tokens
    BANG = "BANG"
    BANG_EQUAL = "BANG_EQUAL"
    EQUAL = "EQUAL"
    EQUAL_EQUAL = "EQUAL_EQUAL"
    GREATER = "GREATER"
    GREATER_EQUAL = "GREATER_EQUAL"
    LESS = "LESS"
    LESS_EQUAL = "LESS_EQUAL"

    # literals
    IDENTIFIER = "IDENTIFIER"
    STRING = "STRING"
    NUMBER = "NUMBER"

    QUESTION = "QUESTION"
    COLON = "COLON"

    # keywords
    AND = "AND"
    CLASS = "CLASS"
    ELSE = "ELSE"
    FALSE = "FALSE"
    FUN = "FUN"
    FOR = "FOR"
    IF = "IF"
    NIL = "NIL"
    OR = "OR"
    PRINT = "PRINT"
    RETURN = "RETURN"
    SUPER = "SUPER"
    THIS = "THIS"
    TRUE = "TRUE"
    VAR = "VAR"
    WHILE = "WHILE"

    EOF = "EOF"

class Token(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: TokenType
    lexeme: str
    literal: Union[float, str, None] = None
    line: int

class ApiErr(BaseModel):
    ok: Literal[False] = False
    phase: Literal["lex","parse","print","gateway"]
    line: Optional[int] = None
    code: str
    msg: str
    errors: List[str] = []

class ApiOk(BaseModel):
    ok: Literal[True] = True
    data: Any
