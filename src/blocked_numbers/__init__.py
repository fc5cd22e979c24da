"""
blocked_numbers – local blocklist of phone numbers and caller identifiers.

Import path convention::

    from blocked_numbers.kernel.errors import InvalidArgumentError
    from blocked_numbers.kernel.phone import Normalizer, FixedCountryDetector
    from blocked_numbers.application.blocklist import BlockedNumberStore, MatchEngine
    from blocked_numbers.adapters.sqlalchemy import SqlAlchemyBlockedNumberTable
    from blocked_numbers.bootstrap import build_blocklist
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
