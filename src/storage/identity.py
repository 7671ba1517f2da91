"""
Identity providers
Resolve the id of the user submitting a report
"""

import logging
import threading
import uuid
from typing import Optional

from src.core.constants import ANONYMOUS_USER_ID

logger = logging.getLogger(__name__)


class StaticIdentityProvider:
    """Always yields the same id. Used in local mode."""

    def __init__(self, user_id: Optional[str] = ANONYMOUS_USER_ID):
        self.user_id = user_id

    def current_user_id(self) -> Optional[str]:
        return self.user_id


class AnonymousIdentityProvider:
    """
    Anonymous sign-in.

    No user exists until sign_in() is called; afterwards the same random
    id is returned for the life of the provider.
    """

    def __init__(self):
        self._user_id: Optional[str] = None
        self._lock = threading.Lock()

    def sign_in(self) -> str:
        """Create the anonymous user if needed and return its id."""
        with self._lock:
            if self._user_id is None:
                self._user_id = uuid.uuid4().hex
                logger.info(f"Anonymous user signed in: {self._user_id}")
            return self._user_id

    def sign_out(self) -> None:
        with self._lock:
            self._user_id = None

    def current_user_id(self) -> Optional[str]:
        return self._user_id
