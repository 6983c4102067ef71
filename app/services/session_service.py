"""
In-process session store for signed-in users
"""

import base64
import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Dict, Optional, Tuple

from app.utils.dates import utcnow

logger = logging.getLogger(__name__)


@dataclass
class SessionRecord:
    user_id: str
    expires_at: datetime


class SessionStore:
    """Maps opaque tokens to user ids with an absolute expiry.

    Sessions live only in this process; a restart signs everyone out. Expired
    entries are dropped lazily when they are next validated.
    """

    def __init__(self, ttl: timedelta = timedelta(hours=24), clock: Callable[[], datetime] = utcnow):
        self.ttl = ttl
        self.clock = clock
        self._sessions: Dict[str, SessionRecord] = {}

    def create(self, user_id: str) -> str:
        token = base64.urlsafe_b64encode(secrets.token_bytes(16)).decode("ascii").rstrip("=")
        self._sessions[token] = SessionRecord(user_id=user_id, expires_at=self.clock() + self.ttl)
        logger.info(f"Session created for user {user_id}")
        return token

    def validate(self, token: Optional[str]) -> Tuple[bool, Optional[str]]:
        if not token or not token.strip():
            return False, None

        record = self._sessions.get(token)
        if record is None:
            return False, None

        if self.clock() >= record.expires_at:
            self._sessions.pop(token, None)
            logger.info(f"Session for user {record.user_id} expired")
            return False, None

        return True, record.user_id

    def delete(self, token: Optional[str]) -> None:
        if token and self._sessions.pop(token, None) is not None:
            logger.info("Session deleted")

    def __len__(self) -> int:
        return len(self._sessions)
