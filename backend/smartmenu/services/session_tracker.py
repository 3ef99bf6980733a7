"""Returning-customer detection by device id."""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional

from sqlalchemy.orm import Session

from smartmenu.models.customer_session import CustomerSession

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class SessionSummary:
    session_id: int
    visit_count: int
    is_returning: bool
    customer_name: Optional[str]
    last_visit: datetime

    @classmethod
    def from_session(cls, session: CustomerSession) -> "SessionSummary":
        return cls(
            session_id=session.id,
            visit_count=session.visit_count,
            is_returning=session.visit_count > 1,
            customer_name=session.customer_name,
            last_visit=session.last_visit,
        )


class SessionTracker:
    """Counts visits per device.

    ``touch`` is a plain find/increment/save with no locking: two concurrent
    touches for the same device may lose an increment.
    """

    def __init__(self, db: Session, clock: Callable[[], datetime] = _utcnow):
        self.db = db
        self._clock = clock

    def _find(self, device_id: str) -> Optional[CustomerSession]:
        return self.db.query(CustomerSession).filter(CustomerSession.device_id == device_id).first()

    def touch(
        self,
        device_id: str,
        table_id: int,
        restaurant_id: int,
        customer_name: Optional[str] = None,
        customer_phone: Optional[str] = None,
    ) -> SessionSummary:
        """Record a sighting of ``device_id`` at ``table_id``."""
        now = self._clock()
        session = self._find(device_id)
        if session is None:
            session = CustomerSession(
                device_id=device_id,
                table_id=table_id,
                restaurant_id=restaurant_id,
                visit_count=1,
                first_visit=now,
                last_visit=now,
            )
            self.db.add(session)
        else:
            session.visit_count = session.visit_count + 1
            session.last_visit = now
            session.table_id = table_id

        # never blank out a known name or phone with an absent field
        if customer_name:
            session.customer_name = customer_name
        if customer_phone:
            session.customer_phone = customer_phone

        self.db.commit()
        self.db.refresh(session)
        logger.debug(f"Device {device_id} seen at table {table_id} (visit {session.visit_count})")
        return SessionSummary.from_session(session)

    def lookup(self, device_id: str) -> Optional[SessionSummary]:
        session = self._find(device_id)
        return SessionSummary.from_session(session) if session else None

    def remember_name(self, device_id: str, customer_name: str) -> bool:
        """Store a name on an existing session; unknown devices are ignored."""
        session = self._find(device_id)
        if session is None:
            return False
        session.customer_name = customer_name
        self.db.commit()
        return True
