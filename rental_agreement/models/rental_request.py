from __future__ import annotations

from sqlalchemy import Integer, Index
from sqlalchemy.orm import Mapped, mapped_column

from rental_agreement.models.base import Base, ULIDMixin, status_column_type
from rental_agreement.models.enums import RequestStatus, LIVE_REQUEST_STATUSES


class RentalRequest(Base, ULIDMixin):
    __tablename__ = "rental_requests"
    __table_args__ = (
        Index("ix_rental_requests_property_status", "property_id", "status"),
        Index("ix_rental_requests_property_tenant", "property_id", "tenant_id"),
    )

    property_id: Mapped[int] = mapped_column(Integer)
    tenant_id: Mapped[int] = mapped_column(Integer, index=True)
    status: Mapped[RequestStatus] = mapped_column(
        status_column_type(RequestStatus), default=RequestStatus.PENDING
    )

    @property
    def is_live(self) -> bool:
        return self.status in LIVE_REQUEST_STATUSES
