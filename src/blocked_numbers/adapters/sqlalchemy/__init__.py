"""SQLAlchemy adapter – blocked-number table, sessions, transactions."""
from blocked_numbers.adapters.sqlalchemy.compiler import compile_expr, compile_order
from blocked_numbers.adapters.sqlalchemy.models import Base, BlockedNumberModel
from blocked_numbers.adapters.sqlalchemy.session import SqlAlchemySessionFactory
from blocked_numbers.adapters.sqlalchemy.table import SqlAlchemyBlockedNumberTable
from blocked_numbers.adapters.sqlalchemy.transaction import transaction

__all__ = [
    "Base",
    "BlockedNumberModel",
    "SqlAlchemyBlockedNumberTable",
    "SqlAlchemySessionFactory",
    "compile_expr",
    "compile_order",
    "transaction",
]
