"""SQLAlchemy adapter – compile filter expressions to bound SQL."""
from __future__ import annotations

from typing import Any, Sequence

from sqlalchemy import ColumnElement, and_, literal, not_, or_

from blocked_numbers.adapters.sqlalchemy.models import BlockedNumberModel
from blocked_numbers.kernel.blocklist import COLUMNS, COLUMN_ID, Expr, SortKey
from blocked_numbers.kernel.blocklist.selection import (
    COMPARISONS,
    And,
    Column,
    Comparison,
    In,
    IsNull,
    Like,
    Literal,
    Not,
    Operand,
    Or,
    coerce_for_column,
)

_MODEL_COLUMNS: dict[str, Any] = {name: getattr(BlockedNumberModel, name) for name in COLUMNS}


def _operand(operand: Operand, other: Operand | None = None) -> Any:
    if isinstance(operand, Column):
        return _MODEL_COLUMNS[operand.name]
    if not isinstance(operand, Literal):
        raise TypeError(f"Unsupported operand: {type(operand).__name__}")
    value = operand.literal
    if isinstance(other, Column):
        value = coerce_for_column(other.name, value)
    return literal(value)


def compile_expr(expr: Expr) -> ColumnElement[bool]:
    """Translate an expression tree into a SQLAlchemy boolean clause."""
    if isinstance(expr, Comparison):
        return COMPARISONS[expr.op](_operand(expr.left, expr.right), _operand(expr.right, expr.left))
    if isinstance(expr, IsNull):
        target = _operand(expr.operand)
        return target.is_not(None) if expr.negated else target.is_(None)
    if isinstance(expr, Like):
        target, pattern = _operand(expr.left), _operand(expr.pattern)
        return target.not_like(pattern) if expr.negated else target.like(pattern)
    if isinstance(expr, In):
        target = _operand(expr.operand)
        column = expr.operand.name if isinstance(expr.operand, Column) else None
        values = [coerce_for_column(column, v.literal) if column else v.literal for v in expr.values]
        return target.not_in(values) if expr.negated else target.in_(values)
    if isinstance(expr, Not):
        return not_(compile_expr(expr.item))
    if isinstance(expr, And):
        return and_(*(compile_expr(item) for item in expr.items))
    if isinstance(expr, Or):
        return or_(*(compile_expr(item) for item in expr.items))
    raise TypeError(f"Unsupported expression node: {type(expr).__name__}")


def compile_order(order_by: Sequence[SortKey]) -> list[Any]:
    """Translate sort keys; ``id`` ascending is always the final tie-breaker."""
    clauses = [
        _MODEL_COLUMNS[key.column].desc() if key.descending else _MODEL_COLUMNS[key.column].asc()
        for key in order_by
    ]
    if not any(key.column == COLUMN_ID for key in order_by):
        clauses.append(_MODEL_COLUMNS[COLUMN_ID].asc())
    return clauses


__all__ = ["compile_expr", "compile_order"]
