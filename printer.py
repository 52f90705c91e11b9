from fastapi import FastAPI
from pydantic import BaseModel
from typing import Optional
from models import ApiOk
from ast_nodes import Expr, Literal, Grouping, Unary, Binary, Conditional
from decimal import Decimal
import math

app = FastAPI(title="printer-svc")

@app.get("/healthz")
def healthz():
    return {"ok": True}

def literal_text(value) -> str:
    if value is None: return "nil"
    if isinstance(value, bool): return "true" if value else "false"
    if isinstance(value, float): return number_text(value)
    return str(value)

def number_text(value: float) -> str:
    """Shortest round-trip text, positional for 1e-6 <= |value| < 1e21."""
    if math.isinf(value): return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21: return str(int(value))
    if 1e-6 <= abs(value) < 1e21: return format(Decimal(repr(value)), "f")
    mantissa, _, exponent = repr(value).partition("e")
    return f"{mantissa}e{exponent[0]}{exponent[1:].lstrip('0')}"

def parenthesize(name, *exprs):
    return "(" + " ".join([name] + [print_expr(e) for e in exprs]) + ")"

def print_expr(expr: Optional[Expr]) -> Optional[str]:
    """Render ``expr`` in prefix form, e.g. ``(* (- 123) (group 45.67))``.

    ``None`` (no expression) renders as ``None``.
    """
    if expr is None: return None
    if isinstance(expr, Binary):
        return parenthesize(expr.operator.lexeme, expr.left, expr.right)
    if isinstance(expr, Grouping):
        return parenthesize("group", expr.expression)
    if isinstance(expr, Literal):
        return literal_text(expr.value)
    if isinstance(expr, Unary):
        return parenthesize(expr.operator.lexeme, expr.right)
    if isinstance(expr, Conditional):
        return parenthesize("?" + print_expr(expr.condition), expr.then_branch, expr.else_branch)
    raise ValueError(f"Unknown node {type(expr).__name__}")

class PrintReq(BaseModel):
    ast: Optional[Expr] = None

@app.post("/print")
def print_api(req: PrintReq):
    return ApiOk(data={"output": print_expr(req.ast)})
