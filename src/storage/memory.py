"""
In-process document store
Holds report documents in memory, in insertion order
"""

import json
import logging
import threading
from collections import defaultdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Union

from src.reports.document import ReportDocument
from src.reports.report import Report

logger = logging.getLogger(__name__)


class InMemoryDocumentStore:
    """
    Document store backed by plain lists.

    Appends are serialized with a lock so concurrent submissions never
    lose an update; reads return a copy.
    """

    def __init__(self):
        self._collections: Dict[str, List[ReportDocument]] = defaultdict(list)
        self._lock = threading.Lock()

        logger.info("InMemoryDocumentStore initialized")

    def insert(self, collection_path: str, document: ReportDocument) -> None:
        with self._lock:
            self._collections[collection_path].append(document)
        logger.debug(f"Stored report {document.report_id} in {collection_path}")

    def list_all(self, collection_path: str) -> List[ReportDocument]:
        with self._lock:
            return list(self._collections.get(collection_path, []))

    def count(self, collection_path: str) -> int:
        with self._lock:
            return len(self._collections.get(collection_path, []))


def load_seed_documents(
    store: InMemoryDocumentStore,
    path: Union[str, Path],
    collection_path: str,
    app_id: str,
) -> int:
    """
    Load earlier reports from a JSON file into the store.

    Each entry carries description, location, photoUri and userId. Entries
    are stored as-is, without validation.

    Args:
        store: Store to fill
        path: JSON file holding a list of report entries
        collection_path: Collection to insert into
        app_id: Namespace tag for the documents

    Returns:
        Number of documents loaded
    """
    entries = json.loads(Path(path).read_text(encoding="utf-8"))
    logger.debug(f"Loading {len(entries)} seed reports from {path}")

    for entry in entries:
        report = Report.create(
            entry.get("description"),
            entry.get("location"),
            entry.get("photoUri"),
            entry.get("userId"),
        )
        store.insert(
            collection_path,
            ReportDocument.from_report(
                report,
                photo_ref=report.photo_local_ref,
                timestamp=datetime.now(timezone.utc),
                user_id=report.owner_id or "",
                app_id=app_id,
                photo_is_remote=False,
            ),
        )

    return len(entries)
