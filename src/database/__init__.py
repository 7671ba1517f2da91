"""
Database module for Pothole Reporter
SQLAlchemy persistence for report documents
"""

from .connection import DatabaseConnection
from .models import Base, ReportDocumentRecord

__all__ = [
    "DatabaseConnection",
    "Base",
    "ReportDocumentRecord",
]
