"""Rental contract: the off-chain record of an agreement produced by an accepted request."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from sqlalchemy import BigInteger, Boolean, CheckConstraint, Date, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rental_agreement.models.base import Base, ULIDMixin, status_column_type
from rental_agreement.models.enums import ContractStatus


class RentalContract(Base, ULIDMixin):
    __tablename__ = "rental_contracts"
    __table_args__ = (
        CheckConstraint("start_date <= end_date", name="ck_rental_contracts_dates"),
    )

    agreement_id_on_chain: Mapped[int] = mapped_column(BigInteger, unique=True)
    request_id: Mapped[str] = mapped_column(String(26), unique=True)
    owner_id: Mapped[int] = mapped_column(Integer, index=True)
    tenant_id: Mapped[int] = mapped_column(Integer, index=True)
    property_id: Mapped[int] = mapped_column(Integer, index=True)
    security_deposit: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    rent_per_month: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    start_date: Mapped[date] = mapped_column(Date)
    end_date: Mapped[date] = mapped_column(Date)
    is_key_delivered: Mapped[bool] = mapped_column(Boolean, default=False)
    is_payment_released: Mapped[bool] = mapped_column(Boolean, default=False)
    state: Mapped[ContractStatus] = mapped_column(
        status_column_type(ContractStatus), default=ContractStatus.PENDING_RESERVATION
    )

    payments = relationship(
        "Payment", back_populates="contract", lazy="selectin",
        order_by="Payment.paid_at",
    )

    def is_party(self, user_id: int) -> bool:
        return user_id in (self.owner_id, self.tenant_id)
