"""
SQLAlchemy models for Pothole Reporter
"""

from datetime import datetime, timezone

from sqlalchemy import (
    Column, Integer, BigInteger, Float, String, Text, Boolean,
    DateTime, Index
)
from sqlalchemy.orm import declarative_base

from src.reports.document import ReportDocument

Base = declarative_base()


class ReportDocumentRecord(Base):
    """
    Stored pothole report document.

    Rows are read back in primary key order, which is insertion order.
    """
    __tablename__ = "report_documents"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Namespace: artifacts/<app_id>/public/data/<collection>
    collection_path = Column(String(255), nullable=False)

    report_id = Column(BigInteger, nullable=False)
    description = Column(Text)

    latitude = Column(Float)
    longitude = Column(Float)

    photo_ref = Column(Text)
    photo_is_remote = Column(Boolean, default=True, nullable=False)

    status = Column(String(20), nullable=False)
    timestamp = Column(DateTime(timezone=True), nullable=False)
    user_id = Column(String(128), nullable=False)
    app_id = Column(String(128), nullable=False)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        Index("idx_report_documents_collection", collection_path),
        Index("idx_report_documents_user", user_id),
    )

    def __repr__(self):
        return f"<ReportDocumentRecord({self.id}, report={self.report_id}, status={self.status})>"

    @classmethod
    def from_document(cls, collection_path: str, document: ReportDocument) -> "ReportDocumentRecord":
        """Create a row from a report document."""
        return cls(
            collection_path=collection_path,
            report_id=document.report_id,
            description=document.description,
            latitude=document.latitude,
            longitude=document.longitude,
            photo_ref=document.photo_ref,
            photo_is_remote=document.photo_is_remote,
            status=document.status,
            timestamp=document.timestamp,
            user_id=document.user_id,
            app_id=document.app_id,
        )

    def to_document(self) -> ReportDocument:
        """Convert back to a report document."""
        timestamp = self.timestamp
        # SQLite drops tzinfo on the way back
        if timestamp is not None and timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        return ReportDocument(
            report_id=self.report_id,
            description=self.description,
            latitude=self.latitude,
            longitude=self.longitude,
            photo_ref=self.photo_ref,
            status=self.status,
            timestamp=timestamp,
            user_id=self.user_id,
            app_id=self.app_id,
            photo_is_remote=self.photo_is_remote,
        )
