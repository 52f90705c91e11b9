from models import Token, TokenType

def report(line: int, where: str, message: str) -> str:
    return f"[line {line}] Error{where}: {message}"

def line_error(line: int, message: str) -> str:
    """Scan-time error: no token to point at, only a line."""
    return report(line, "", message)

def token_error(token: Token, message: str) -> str:
    if token.type == TokenType.EOF:
        return report(token.line, " at end", message)
    return report(token.line, f" at '{token.lexeme}'", message)
