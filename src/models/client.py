"""Client-related SQLAlchemy models."""

from datetime import date
from decimal import Decimal

from sqlalchemy import CheckConstraint, Date, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from src.models.base import Base


class Client(Base):
    """Represents a registered client with a plan, used hours and payments."""

    __tablename__ = "clients"
    __table_args__ = (
        CheckConstraint("hours >= 0", name="ck_clients_hours_non_negative"),
        CheckConstraint("abono >= 0", name="ck_clients_abono_non_negative"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    dni: Mapped[str | None] = mapped_column(String(50))
    representative: Mapped[str | None] = mapped_column(String(255))
    representative_dni: Mapped[str | None] = mapped_column(String(50))
    email: Mapped[str | None] = mapped_column(String(255))
    address: Mapped[str | None] = mapped_column(String(500))
    phone: Mapped[str | None] = mapped_column(String(50))
    plan: Mapped[str] = mapped_column(String(50), nullable=False)

    # Cumulative amount paid toward the plan price
    abono: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), default=Decimal("0"), nullable=False
    )
    hours: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    created_date: Mapped[date] = mapped_column(
        Date, default=date.today, nullable=False
    )
