"""SQLAlchemy adapter – ORM model for the ``blocked`` table."""
from __future__ import annotations

from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from blocked_numbers.kernel.blocklist import BlockedNumberRecord

UNIQUE_ORIGINAL_NUMBER = "uq_blocked_original_number"


class Base(DeclarativeBase):
    pass


class BlockedNumberModel(Base):
    """One row per blocked number.

    ``stripped_number`` and ``e164_number`` are indexed for the match
    engine's exact-key probes.
    """

    __tablename__ = "blocked"
    __table_args__ = (UniqueConstraint("original_number", name=UNIQUE_ORIGINAL_NUMBER),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    original_number: Mapped[str] = mapped_column(String, nullable=False)
    e164_number: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    stripped_number: Mapped[str] = mapped_column(String, nullable=False, index=True)

    def to_record(self) -> BlockedNumberRecord:
        return BlockedNumberRecord(
            id=self.id,
            original_number=self.original_number,
            e164_number=self.e164_number,
            stripped_number=self.stripped_number,
        )


__all__ = ["Base", "BlockedNumberModel", "UNIQUE_ORIGINAL_NUMBER"]
