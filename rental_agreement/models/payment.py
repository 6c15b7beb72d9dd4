"""Payment record: a ledger fact reported back for a contract. Append-only."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import String, Numeric, ForeignKey, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rental_agreement.models.base import Base, ULIDMixin, status_column_type, utcnow
from rental_agreement.models.enums import PaymentType


class Payment(Base, ULIDMixin):
    __tablename__ = "payments"

    contract_id: Mapped[str] = mapped_column(String(26), ForeignKey("rental_contracts.id"), index=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    tx_hash: Mapped[str] = mapped_column(String(100), unique=True)
    payment_type: Mapped[PaymentType] = mapped_column(status_column_type(PaymentType), default=PaymentType.RENT)
    paid_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    contract = relationship("RentalContract", back_populates="payments")
