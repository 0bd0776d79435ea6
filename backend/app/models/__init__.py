"""SQLAlchemy models for the credit risk service."""

from app.models.applicant import ApplicantRecord

__all__ = ["ApplicantRecord"]
