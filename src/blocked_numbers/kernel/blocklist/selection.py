"""Filter expressions over the blocklist columns.

Callers may narrow ``query`` and ``delete`` with a small SQL-like filter
(``e164_number = ?``) plus positional arguments. The text is parsed here
against a strict grammar and turned into an expression tree; it is never
handed to the database as text. Backends either evaluate the tree in memory
(:meth:`Expr.evaluate`) or compile it to bound SQL expressions.

Grammar::

    expr       := term (OR term)*
    term       := factor (AND factor)*
    factor     := NOT factor | "(" expr ")" | predicate
    predicate  := operand (= | == | != | <> | < | <= | > | >=) operand
                | operand IS [NOT] NULL
                | operand [NOT] LIKE operand
                | operand [NOT] IN "(" value ("," value)* ")"
    operand    := column | value
    value      := "?" | integer | 'single-quoted string' | NULL

Anything outside the grammar raises :class:`SelectionSyntaxError`, as do
integers outside the signed 64-bit range and nesting deeper than
:data:`MAX_NESTING`.
"""

from __future__ import annotations

import abc
import dataclasses
import operator
import re
from typing import Any, Callable, Final, Sequence

from blocked_numbers.kernel.blocklist.record import COLUMNS, COLUMN_ID, fits_integer, parse_integer
from blocked_numbers.kernel.errors import InvalidArgumentError, SelectionSyntaxError

_TOKEN_RE: Final = re.compile(
    r"""
    (?P<ws>\s+)
  | (?P<number>\d+)
  | (?P<string>'(?:[^']|'')*')
  | (?P<param>\?)
  | (?P<op><=|>=|<>|!=|==|=|<|>)
  | (?P<lparen>\()
  | (?P<rparen>\))
  | (?P<comma>,)
  | (?P<ident>[A-Za-z_][A-Za-z0-9_]*)
    """,
    re.VERBOSE,
)

_KEYWORDS: Final = frozenset({"AND", "OR", "NOT", "IS", "NULL", "LIKE", "IN", "ASC", "DESC"})

#: Deepest nesting of parentheses and NOT accepted in one filter.
MAX_NESTING: Final = 64

COMPARISONS: Final[dict[str, Callable[[Any, Any], bool]]] = {
    "=": operator.eq,
    "==": operator.eq,
    "!=": operator.ne,
    "<>": operator.ne,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
}


@dataclasses.dataclass(frozen=True, slots=True)
class _Token:
    kind: str
    text: str
    position: int

    @property
    def keyword(self) -> str | None:
        if self.kind == "ident" and self.text.upper() in _KEYWORDS:
            return self.text.upper()
        return None


def _tokenize(text: str) -> list[_Token]:
    tokens: list[_Token] = []
    position = 0
    while position < len(text):
        match = _TOKEN_RE.match(text, position)
        if match is None:
            raise SelectionSyntaxError(
                f"unrecognized token {text[position]!r} at position {position}",
                selection=text,
                position=position,
            )
        kind = match.lastgroup or ""
        if kind != "ws":
            tokens.append(_Token(kind, match.group(), position))
        position = match.end()
    return tokens


# ---------------------------------------------------------------------------
# Expression tree
# ---------------------------------------------------------------------------


def coerce_for_column(column: str, value: Any) -> Any:
    """Apply column affinity: ``id`` compares as integer, the rest as text."""
    if value is None:
        return None
    if column == COLUMN_ID:
        if isinstance(value, str):
            number = parse_integer(value.strip())
            if number is not None:
                return number
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


def _sort_class(value: Any) -> int:
    return 0 if isinstance(value, (int, float)) else 1


def _compare(op: str, left: Any, right: Any) -> bool | None:
    if left is None or right is None:
        return None
    if _sort_class(left) != _sort_class(right):
        # Numbers order before text, as in SQLite.
        left, right = _sort_class(left), _sort_class(right)
    return COMPARISONS[op](left, right)


def _like_pattern(pattern: str) -> re.Pattern[str]:
    parts = []
    for ch in pattern:
        if ch == "%":
            parts.append(".*")
        elif ch == "_":
            parts.append(".")
        else:
            parts.append(re.escape(ch))
    return re.compile("".join(parts), re.IGNORECASE | re.DOTALL)


class Expr(abc.ABC):
    """Base node of a filter expression tree."""

    @abc.abstractmethod
    def evaluate(self, row: dict[str, Any]) -> bool | None:
        """Evaluate against *row* with SQL three-valued logic."""

    def matches(self, row: dict[str, Any]) -> bool:
        return self.evaluate(row) is True


class Operand(abc.ABC):
    """Leaf of a predicate: a column reference or a literal value."""

    @abc.abstractmethod
    def value(self, row: dict[str, Any]) -> Any: ...


@dataclasses.dataclass(frozen=True)
class Column(Operand):
    name: str

    def value(self, row: dict[str, Any]) -> Any:
        return row.get(self.name)


@dataclasses.dataclass(frozen=True)
class Literal(Operand):
    literal: Any

    def value(self, row: dict[str, Any]) -> Any:  # noqa: ARG002
        return self.literal


def _pair(left: Operand, right: Operand, row: dict[str, Any]) -> tuple[Any, Any]:
    lvalue, rvalue = left.value(row), right.value(row)
    if isinstance(left, Column) and isinstance(right, Literal):
        rvalue = coerce_for_column(left.name, rvalue)
    elif isinstance(right, Column) and isinstance(left, Literal):
        lvalue = coerce_for_column(right.name, lvalue)
    return lvalue, rvalue


@dataclasses.dataclass(frozen=True)
class Comparison(Expr):
    op: str
    left: Operand
    right: Operand

    def evaluate(self, row: dict[str, Any]) -> bool | None:
        return _compare(self.op, *_pair(self.left, self.right, row))


@dataclasses.dataclass(frozen=True)
class IsNull(Expr):
    operand: Operand
    negated: bool = False

    def evaluate(self, row: dict[str, Any]) -> bool | None:
        is_null = self.operand.value(row) is None
        return not is_null if self.negated else is_null


@dataclasses.dataclass(frozen=True)
class Like(Expr):
    left: Operand
    pattern: Operand
    negated: bool = False

    def evaluate(self, row: dict[str, Any]) -> bool | None:
        value, pattern = self.left.value(row), self.pattern.value(row)
        if value is None or pattern is None:
            return None
        found = _like_pattern(str(pattern)).fullmatch(str(value)) is not None
        return not found if self.negated else found


@dataclasses.dataclass(frozen=True)
class In(Expr):
    operand: Operand
    values: tuple[Literal, ...]
    negated: bool = False

    def evaluate(self, row: dict[str, Any]) -> bool | None:
        results = [Comparison("=", self.operand, item).evaluate(row) for item in self.values]
        if True in results:
            found: bool | None = True
        elif None in results:
            found = None
        else:
            found = False
        if found is None:
            return None
        return not found if self.negated else found


@dataclasses.dataclass(frozen=True)
class Not(Expr):
    item: Expr

    def evaluate(self, row: dict[str, Any]) -> bool | None:
        result = self.item.evaluate(row)
        return None if result is None else not result


@dataclasses.dataclass(frozen=True)
class And(Expr):
    items: tuple[Expr, ...]

    def evaluate(self, row: dict[str, Any]) -> bool | None:
        results = [item.evaluate(row) for item in self.items]
        if False in results:
            return False
        if None in results:
            return None
        return True


@dataclasses.dataclass(frozen=True)
class Or(Expr):
    items: tuple[Expr, ...]

    def evaluate(self, row: dict[str, Any]) -> bool | None:
        results = [item.evaluate(row) for item in self.items]
        if True in results:
            return True
        if None in results:
            return None
        return False


@dataclasses.dataclass(frozen=True)
class SortKey:
    column: str
    descending: bool = False


def column_equals(column: str, value: Any) -> Expr:
    return Comparison("=", Column(column), Literal(value))


def id_equals(record_id: int) -> Expr:
    return column_equals(COLUMN_ID, record_id)


def all_of(*items: Expr | None) -> Expr | None:
    """AND together the non-``None`` items."""
    present = tuple(item for item in items if item is not None)
    if not present:
        return None
    if len(present) == 1:
        return present[0]
    return And(present)


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


class _Parser:
    def __init__(self, text: str, args: Sequence[Any]) -> None:
        self._text = text
        self._tokens = _tokenize(text)
        self._index = 0
        self._args = list(args)
        self._next_arg = 0
        self._depth = 0

    # -- token helpers ---------------------------------------------------

    def _peek(self) -> _Token | None:
        return self._tokens[self._index] if self._index < len(self._tokens) else None

    def _advance(self) -> _Token:
        token = self._peek()
        if token is None:
            raise self._error("unexpected end of expression", len(self._text))
        self._index += 1
        return token

    def _accept_keyword(self, *keywords: str) -> str | None:
        token = self._peek()
        if token is not None and token.keyword in keywords:
            self._index += 1
            return token.keyword
        return None

    def _expect(self, kind: str) -> _Token:
        token = self._advance()
        if token.kind != kind:
            raise self._error(f"near {token.text!r}: expected {kind}", token.position)
        return token

    def _error(self, message: str, position: int) -> SelectionSyntaxError:
        return SelectionSyntaxError(message, selection=self._text, position=position)

    # -- grammar ---------------------------------------------------------

    def parse(self) -> Expr:
        expr = self._expr()
        token = self._peek()
        if token is not None:
            raise self._error(f"near {token.text!r}: unexpected trailing input", token.position)
        if self._next_arg != len(self._args):
            raise InvalidArgumentError(
                f"Too many selection arguments: expression uses {self._next_arg}, "
                f"got {len(self._args)}",
                field="selection_args",
            )
        return expr

    def parse_sort(self) -> list[SortKey]:
        keys = [self._sort_key()]
        while (token := self._peek()) is not None and token.kind == "comma":
            self._index += 1
            keys.append(self._sort_key())
        token = self._peek()
        if token is not None:
            raise self._error(f"near {token.text!r}: unexpected trailing input", token.position)
        return keys

    def _sort_key(self) -> SortKey:
        column = self._column(self._expect("ident"))
        direction = self._accept_keyword("ASC", "DESC")
        return SortKey(column.name, descending=direction == "DESC")

    def _expr(self) -> Expr:
        items = [self._term()]
        while self._accept_keyword("OR"):
            items.append(self._term())
        return items[0] if len(items) == 1 else Or(tuple(items))

    def _term(self) -> Expr:
        items = [self._factor()]
        while self._accept_keyword("AND"):
            items.append(self._factor())
        return items[0] if len(items) == 1 else And(tuple(items))

    def _factor(self) -> Expr:
        token = self._peek()
        if token is None or not (token.keyword == "NOT" or token.kind == "lparen"):
            return self._predicate()
        if self._depth >= MAX_NESTING:
            raise self._error(f"expression nested deeper than {MAX_NESTING} levels", token.position)
        self._index += 1
        self._depth += 1
        try:
            if token.kind == "lparen":
                expr = self._expr()
                self._expect("rparen")
                return expr
            return Not(self._factor())
        finally:
            self._depth -= 1

    def _predicate(self) -> Expr:
        left = self._operand()
        token = self._advance()
        if token.kind == "op":
            return Comparison(token.text, left, self._operand())
        keyword = token.keyword
        if keyword == "IS":
            negated = self._accept_keyword("NOT") is not None
            if self._accept_keyword("NULL") is None:
                raise self._error("expected NULL after IS", token.position)
            return IsNull(left, negated=negated)
        negated = False
        if keyword == "NOT":
            negated = True
            token = self._advance()
            keyword = token.keyword
        if keyword == "LIKE":
            return Like(left, self._operand(), negated=negated)
        if keyword == "IN":
            return In(left, self._value_list(), negated=negated)
        raise self._error(f"near {token.text!r}: syntax error", token.position)

    def _value_list(self) -> tuple[Literal, ...]:
        self._expect("lparen")
        values = [self._value(self._advance())]
        while (token := self._peek()) is not None and token.kind == "comma":
            self._index += 1
            values.append(self._value(self._advance()))
        self._expect("rparen")
        return tuple(values)

    def _operand(self) -> Operand:
        token = self._advance()
        if token.kind == "ident" and token.keyword is None:
            return self._column(token)
        return self._value(token)

    def _value(self, token: _Token) -> Literal:
        if token.kind == "number":
            number = parse_integer(token.text)
            if number is None:
                raise self._error(f"integer out of range: {token.text}", token.position)
            return Literal(number)
        if token.kind == "string":
            return Literal(token.text[1:-1].replace("''", "'"))
        if token.kind == "param":
            if self._next_arg >= len(self._args):
                raise InvalidArgumentError(
                    f"Missing selection argument for placeholder #{self._next_arg + 1}",
                    field="selection_args",
                )
            value = self._args[self._next_arg]
            if isinstance(value, int) and not fits_integer(value):
                raise self._error(
                    f"selection argument #{self._next_arg + 1} out of range: {value}", token.position
                )
            self._next_arg += 1
            return Literal(value)
        if token.keyword == "NULL":
            return Literal(None)
        raise self._error(f"near {token.text!r}: syntax error", token.position)

    def _column(self, token: _Token) -> Column:
        if token.keyword is not None:
            raise self._error(f"near {token.text!r}: syntax error", token.position)
        name = token.text.lower()
        if name not in COLUMNS:
            raise self._error(f"no such column: {token.text}", token.position)
        return Column(name)


def parse_selection(selection: str | None, selection_args: Sequence[Any] = ()) -> Expr | None:
    """Parse *selection* with its positional *selection_args*.

    Returns ``None`` for a missing or blank selection.
    """
    if selection is None or not selection.strip():
        if selection_args:
            raise InvalidArgumentError(
                "Selection arguments given without a selection", field="selection_args"
            )
        return None
    return _Parser(selection, selection_args).parse()


def parse_sort_order(sort_order: str | None) -> list[SortKey]:
    """Parse ``"column [ASC|DESC], ..."``; blank input means no ordering."""
    if sort_order is None or not sort_order.strip():
        return []
    return _Parser(sort_order, ()).parse_sort()


__all__ = [
    "And",
    "COMPARISONS",
    "Column",
    "Comparison",
    "Expr",
    "In",
    "IsNull",
    "Like",
    "Literal",
    "MAX_NESTING",
    "Not",
    "Operand",
    "Or",
    "SortKey",
    "all_of",
    "coerce_for_column",
    "column_equals",
    "id_equals",
    "parse_selection",
    "parse_sort_order",
]
