from __future__ import annotations
from typing import Any, Dict, List, Optional

from decimal_parser import parse_prefix
from edag import EDAG, Node
from errors import ExpressionError
from rational import Rational

# =====================
# Arithmetic over decimal literals
# =====================


class ExprTok:
    def __init__(self, kind: str, lex: str = "", num: Optional[Rational] = None):
        self.kind, self.lex, self.num = kind, lex, num

    def __repr__(self) -> str:
        return f"ExprTok({self.kind!r}, {self.lex!r})"


_operand_kinds = ("NUM", "ID", ")")


def expr_tokenize(expr: str) -> List[ExprTok]:
    s = expr
    i, n = 0, len(s)
    toks: List[ExprTok] = []
    prev: Optional[ExprTok] = None
    while i < n:
        c = s[i]
        if c.isspace():
            i += 1
            continue
        if c in "+-*/^()":
            k = c
            i += 1
            if k == "-" and (prev is None or prev.kind in ("+", "-", "*", "/", "^", "(", "NEG")):
                k = "NEG"
            # implicit multiplication, e.g. "2(1+1)" or ")("
            if k == "(" and prev and prev.kind in _operand_kinds:
                toks.append(ExprTok("*", "*"))
            t = ExprTok(k, c)
            toks.append(t)
            prev = t
            continue
        if c in "0123456789.":
            # the literal owns a "(" right after its fractional digits: "1.(3)"
            num, j = parse_prefix(s, i)
            if prev and prev.kind in _operand_kinds:
                toks.append(ExprTok("*", "*"))
            toks.append(ExprTok("NUM", s[i:j], num))
            i = j
            prev = toks[-1]
            continue
        if c.isalpha() or c == "_":
            j = i + 1
            while j < n and (s[j].isalnum() or s[j] == "_"):
                j += 1
            if prev and prev.kind in _operand_kinds:
                toks.append(ExprTok("*", "*"))
            toks.append(ExprTok("ID", s[i:j]))
            i = j
            prev = toks[-1]
            continue
        raise ExpressionError(f"Unexpected char {c!r} at {i}")
    return toks


_binary_prec = {"^": 4, "*": 2, "/": 2, "+": 1, "-": 1}
_NEG_PREC = 3


def _reduces_before(incoming: str, stacked: ExprTok) -> bool:
    """True when the stacked operator must be emitted before ``incoming``."""
    if stacked.kind == "(":
        return False
    top = _NEG_PREC if stacked.kind == "NEG" else _binary_prec[stacked.kind]
    if incoming == "^":
        # right-associative
        return top > _binary_prec["^"]
    return top >= _binary_prec[incoming]


def expr_to_rpn(toks: List[ExprTok]) -> List[ExprTok]:
    out: List[ExprTok] = []
    pending: List[ExprTok] = []
    for t in toks:
        if t.kind in ("NUM", "ID"):
            out.append(t)
        elif t.kind in ("NEG", "("):
            # prefix: nothing on the left is complete yet
            pending.append(t)
        elif t.kind in _binary_prec:
            while pending and _reduces_before(t.kind, pending[-1]):
                out.append(pending.pop())
            pending.append(t)
        elif t.kind == ")":
            while pending and pending[-1].kind != "(":
                out.append(pending.pop())
            if not pending:
                raise ExpressionError("Mismatched parens")
            pending.pop()
        else:
            raise ExpressionError(f"Unknown token kind {t.kind!r}")
    for t in reversed(pending):
        if t.kind == "(":
            raise ExpressionError("Mismatched parens")
        out.append(t)
    return out


def rpn_to_edag(rpn: List[ExprTok]) -> EDAG:
    dag = EDAG()
    stack: List[str] = []
    for t in rpn:
        if t.kind == "NUM":
            stack.append(dag.add_node(Node("CONST", t.lex, value=t.num)))
        elif t.kind == "ID":
            stack.append(dag.add_node(Node("VAR", t.lex)))
        elif t.kind == "NEG":
            if not stack:
                raise ExpressionError("neg missing operand")
            a = stack.pop()
            stack.append(dag.add_op("-", [a], is_unary=True))
        elif t.kind in ("+", "-", "*", "/", "^"):
            if len(stack) < 2:
                raise ExpressionError("binary op missing operands")
            b = stack.pop()
            a = stack.pop()
            stack.append(dag.add_op(t.lex, [a, b]))
        else:
            raise ExpressionError("Unknown RPN token")
    if len(stack) != 1:
        raise ExpressionError("Invalid expression")
    dag.root = stack[-1]
    return dag


def parse_expression_edag(expr: str) -> EDAG:
    toks = expr_tokenize(expr)
    if not toks:
        raise ExpressionError("empty expression")
    rpn = expr_to_rpn(toks)
    return rpn_to_edag(rpn)


def evaluate(expr: str, env: Optional[Dict[str, Any]] = None) -> Rational:
    return parse_expression_edag(expr).eval(env)
