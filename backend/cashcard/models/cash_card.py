"""
Cash Card API: CashCard SQLAlchemy Model
========================================

What:  ORM model for the `cash_card` table.
How:   Registered on `Base.metadata`; `database.create_schema()` creates the
       table from it at startup.
Who:   Returned by the repository's primary-key lookup.

Table:
    cash_card(
        id      BIGINT PRIMARY KEY AUTOINCREMENT,
        amount  NUMERIC NOT NULL DEFAULT 0
    )

    SQLite only autoincrements an INTEGER PRIMARY KEY, so `id` is declared as
    BIGINT with an INTEGER variant for that dialect. SQLite integers are
    64-bit, so the identifier range is the same on both.

    SQLite also has no exact decimal storage (NUMERIC affinity becomes REAL),
    so on that dialect `amount` is kept as the Decimal's text by DecimalText.
"""

from decimal import Decimal

from sqlalchemy import BigInteger, Integer, Numeric, String, text
from sqlalchemy.types import TypeDecorator
from sqlalchemy.orm import Mapped, mapped_column

from cashcard.database import Base


class DecimalText(TypeDecorator):
    """Decimal persisted as its exact string form, e.g. '0.12345678901'."""

    impl = String
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return str(Decimal(str(value)))

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Decimal(str(value))


class CashCard(Base):
    """
    A single cash card: an identifier and the amount held on it.

    Rows are read-only for this service. `id` never changes once persisted;
    `amount` is returned exactly as stored.
    """

    __tablename__ = "cash_card"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )

    # NUMERIC without precision/scale: the database keeps what it was given.
    # SQLite would coerce NUMERIC to REAL, so there the decimal text is stored.
    amount: Mapped[Decimal] = mapped_column(
        Numeric(asdecimal=True).with_variant(DecimalText(), "sqlite"),
        nullable=False,
        default=Decimal("0"),
        server_default=text("0"),
    )

    def __repr__(self) -> str:
        return f"<CashCard(id={self.id}, amount={self.amount})>"
