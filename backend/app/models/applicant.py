"""Stored loan-applicant record with its risk assessment."""

from datetime import datetime
from typing import Any

from sqlalchemy import String, Float, DateTime, JSON, func
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class ApplicantRecord(Base):
    __tablename__ = "applicant_records"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    # Contact
    name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(30), nullable=True)

    # Submitted data, stored in the camelCase wire shape
    traditional_data: Mapped[dict] = mapped_column(JSON, nullable=False)
    alternative_data: Mapped[dict] = mapped_column(JSON, nullable=False)

    # Engine output
    risk_score: Mapped[float] = mapped_column(Float, nullable=False)
    risk_factors: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "traditionalData": self.traditional_data,
            "alternativeData": self.alternative_data,
            "riskScore": self.risk_score,
            "riskFactors": list(self.risk_factors or []),
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
