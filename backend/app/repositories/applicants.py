"""Storage for applicant records.

Handlers receive an ``ApplicantRepository`` through a FastAPI dependency.
Records cross this boundary as plain dicts in the camelCase wire shape:
``traditionalData``, ``alternativeData``, ``riskScore``, ``riskFactors`` plus
``id``, contact fields and timestamps.
"""

from __future__ import annotations

import abc
import copy
import itertools
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.applicant import ApplicantRecord

_CONTACT_FIELDS = ("name", "email", "phone")


class ApplicantRepository(abc.ABC):
    """Create/read/replace operations over applicant records."""

    @abc.abstractmethod
    async def create(self, data: dict[str, Any]) -> dict[str, Any]:
        """Persist a new record and return it with its assigned id."""

    @abc.abstractmethod
    async def get(self, record_id: int) -> Optional[dict[str, Any]]:
        """Return the record, or None when it does not exist."""

    @abc.abstractmethod
    async def replace(self, record_id: int, data: dict[str, Any]) -> Optional[dict[str, Any]]:
        """Overwrite the stored data and return the updated record, or None."""


class SqlApplicantRepository(ApplicantRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    @staticmethod
    def _apply(row: ApplicantRecord, data: dict[str, Any]) -> None:
        for key in _CONTACT_FIELDS:
            setattr(row, key, data.get(key))
        row.traditional_data = data["traditionalData"]
        row.alternative_data = data["alternativeData"]
        row.risk_score = data["riskScore"]
        row.risk_factors = list(data.get("riskFactors") or [])

    async def create(self, data: dict[str, Any]) -> dict[str, Any]:
        row = ApplicantRecord()
        self._apply(row, data)
        self.session.add(row)
        await self.session.commit()
        await self.session.refresh(row)
        return row.to_dict()

    async def get(self, record_id: int) -> Optional[dict[str, Any]]:
        result = await self.session.execute(
            select(ApplicantRecord).where(ApplicantRecord.id == record_id)
        )
        row = result.scalar_one_or_none()
        return row.to_dict() if row else None

    async def replace(self, record_id: int, data: dict[str, Any]) -> Optional[dict[str, Any]]:
        result = await self.session.execute(
            select(ApplicantRecord).where(ApplicantRecord.id == record_id)
        )
        row = result.scalar_one_or_none()
        if not row:
            return None
        self._apply(row, data)
        await self.session.commit()
        await self.session.refresh(row)
        return row.to_dict()


class InMemoryApplicantRepository(ApplicantRepository):
    """Dict-backed repository for tests and local runs without a database."""

    def __init__(self) -> None:
        self._records: dict[int, dict[str, Any]] = {}
        self._ids = itertools.count(1)

    def _build(self, record_id: int, data: dict[str, Any], created_at: datetime) -> dict[str, Any]:
        record = {key: data.get(key) for key in _CONTACT_FIELDS}
        record.update(
            id=record_id,
            traditionalData=copy.deepcopy(data["traditionalData"]),
            alternativeData=copy.deepcopy(data["alternativeData"]),
            riskScore=data["riskScore"],
            riskFactors=list(data.get("riskFactors") or []),
            createdAt=created_at,
            updatedAt=datetime.now(timezone.utc),
        )
        return record

    async def create(self, data: dict[str, Any]) -> dict[str, Any]:
        record_id = next(self._ids)
        record = self._build(record_id, data, datetime.now(timezone.utc))
        self._records[record_id] = record
        return copy.deepcopy(record)

    async def get(self, record_id: int) -> Optional[dict[str, Any]]:
        record = self._records.get(record_id)
        return copy.deepcopy(record) if record else None

    async def replace(self, record_id: int, data: dict[str, Any]) -> Optional[dict[str, Any]]:
        existing = self._records.get(record_id)
        if existing is None:
            return None
        record = self._build(record_id, data, existing["createdAt"])
        self._records[record_id] = record
        return copy.deepcopy(record)
