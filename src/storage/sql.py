"""
SQL document store
Persists report documents through SQLAlchemy
"""

import logging
from typing import List

from sqlalchemy import select

from src.database.connection import DatabaseConnection
from src.database.models import ReportDocumentRecord
from src.reports.document import ReportDocument

logger = logging.getLogger(__name__)


class SqlDocumentStore:
    """
    Document store backed by a relational database.

    Each insert runs in its own session; SQLAlchemy errors propagate to
    the caller after the session is rolled back.
    """

    def __init__(self, db: DatabaseConnection, create_tables: bool = True):
        """
        Initialize SQL document store.

        Args:
            db: Open database connection
            create_tables: Create the schema if it does not exist
        """
        self.db = db
        if create_tables:
            self.db.create_tables()

        logger.info("SqlDocumentStore initialized")

    def insert(self, collection_path: str, document: ReportDocument) -> None:
        with self.db.get_session() as session:
            session.add(ReportDocumentRecord.from_document(collection_path, document))
        logger.debug(f"Stored report {document.report_id} in {collection_path}")

    def list_all(self, collection_path: str) -> List[ReportDocument]:
        query = (
            select(ReportDocumentRecord)
            .where(ReportDocumentRecord.collection_path == collection_path)
            .order_by(ReportDocumentRecord.id)
        )
        with self.db.get_session() as session:
            return [record.to_document() for record in session.scalars(query)]
