"""Expression tree produced by the parser.

Nodes are frozen pydantic models tagged by ``type`` so a tree can be sent as
JSON from the parser service to the printer service and validated back into
the same shapes.  A parse that recovered from a malformed operand yields
``None`` instead of a node; ``None`` is never stored inside a node.
"""
import typing as t
from pydantic import BaseModel, ConfigDict, Field
from models import Token

class Node(BaseModel):
    model_config = ConfigDict(frozen=True)

class Literal(Node):
    type: t.Literal["literal"] = "literal"
    value: t.Union[bool, float, str, None] = None

class Grouping(Node):
    type: t.Literal["grouping"] = "grouping"
    expression: "Expr"

class Unary(Node):
    type: t.Literal["unary"] = "unary"
    operator: Token
    right: "Expr"

class Binary(Node):
    type: t.Literal["binary"] = "binary"
    left: "Expr"
    operator: Token
    right: "Expr"

class Conditional(Node):
    type: t.Literal["conditional"] = "conditional"
    condition: "Expr"
    then_branch: "Expr"
    else_branch: "Expr"

Expr = t.Annotated[
    t.Union[Literal, Grouping, Unary, Binary, Conditional],
    Field(discriminator="type"),
]

for _model in (Grouping, Unary, Binary, Conditional):
    _model.model_rebuild()
