"""Tests for device session tracking."""

from datetime import datetime, timedelta, timezone

from smartmenu.models.customer_session import CustomerSession
from smartmenu.services.session_tracker import SessionTracker

T0 = datetime(2024, 1, 15, 18, 0, 0, tzinfo=timezone.utc)


class SteppingClock:
    """Advances one minute per call."""

    def __init__(self, start: datetime = T0):
        self.now = start

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + timedelta(minutes=1)
        return current


class TestTouch:
    def test_first_sighting(self, db_session, owner, table):
        summary = SessionTracker(db_session).touch("device-1", table.id, owner.id)
        assert summary.visit_count == 1
        assert summary.is_returning is False
        assert summary.customer_name is None

        session = db_session.query(CustomerSession).one()
        assert session.device_id == "device-1"
        assert session.first_visit == session.last_visit
        assert session.restaurant_id == owner.id

    def test_visits_are_counted(self, db_session, owner, table):
        tracker = SessionTracker(db_session)
        tracker.touch("device-1", table.id, owner.id)
        tracker.touch("device-1", table.id, owner.id)
        summary = tracker.touch("device-1", table.id, owner.id)
        assert summary.visit_count == 3
        assert summary.is_returning is True
        assert db_session.query(CustomerSession).count() == 1

    def test_name_is_kept_when_not_resent(self, db_session, owner, table):
        tracker = SessionTracker(db_session)
        tracker.touch("device-1", table.id, owner.id, customer_name="Wanjiku", customer_phone="+254700000000")
        summary = tracker.touch("device-1", table.id, owner.id)
        assert summary.customer_name == "Wanjiku"
        assert db_session.query(CustomerSession).one().customer_phone == "+254700000000"

    def test_new_name_overwrites(self, db_session, owner, table):
        tracker = SessionTracker(db_session)
        tracker.touch("device-1", table.id, owner.id, customer_name="Wanjiku")
        summary = tracker.touch("device-1", table.id, owner.id, customer_name="Achieng")
        assert summary.customer_name == "Achieng"

    def test_last_visit_and_table_updated(self, db_session, owner, table):
        tracker = SessionTracker(db_session, clock=SteppingClock())
        tracker.touch("device-1", table.id, owner.id)
        tracker.touch("device-1", None, owner.id)

        session = db_session.query(CustomerSession).one()
        assert session.table_id is None
        assert session.last_visit.replace(tzinfo=None) == (T0 + timedelta(minutes=1)).replace(tzinfo=None)
        assert session.first_visit.replace(tzinfo=None) == T0.replace(tzinfo=None)

    def test_devices_are_independent(self, db_session, owner, table):
        tracker = SessionTracker(db_session)
        tracker.touch("device-1", table.id, owner.id)
        summary = tracker.touch("device-2", table.id, owner.id)
        assert summary.visit_count == 1


class TestLookup:
    def test_unknown_device(self, db_session):
        assert SessionTracker(db_session).lookup("nobody") is None

    def test_lookup_does_not_count_a_visit(self, db_session, owner, table):
        tracker = SessionTracker(db_session)
        tracker.touch("device-1", table.id, owner.id)
        assert tracker.lookup("device-1").visit_count == 1
        assert tracker.lookup("device-1").visit_count == 1

    def test_remember_name(self, db_session, owner, table):
        tracker = SessionTracker(db_session)
        tracker.touch("device-1", table.id, owner.id)
        assert tracker.remember_name("device-1", "Otieno") is True
        assert tracker.lookup("device-1").customer_name == "Otieno"

    def test_remember_name_unknown_device(self, db_session):
        assert SessionTracker(db_session).remember_name("nobody", "Otieno") is False
        assert db_session.query(CustomerSession).count() == 0
