"""Tests for the admin audit log."""

import datetime
import unittest
from unittest.mock import MagicMock

from google.api_core import exceptions as google_exceptions
from google.auth import exceptions as google_auth_exceptions
from mockfirestore import MockFirestore

from matchmaster.audit.models import (
    AdminAction,
    AdminLogEntry,
    AdminLogFilters,
    AdminLogPage,
    TargetType,
)
from matchmaster.audit.writer import FirestoreAuditLog, MemoryAuditLog
from matchmaster.errors import AuditWriteError, StoreError
from tests.conftest import FIXED_NOW, patch_mockfirestore


def _entry(
    days_ago,
    target_id,
    reason=None,
    action=AdminAction.OVERRIDE_MATCH,
    admin_name="Admin User",
):
    return AdminLogEntry(
        action=action,
        target_type=TargetType.MATCH,
        target_id=target_id,
        target_name=f"Match {target_id}",
        admin_id="admin_uid",
        admin_name=admin_name,
        reason=reason,
        details={"old_status": "active"},
        timestamp=FIXED_NOW - datetime.timedelta(days=days_ago),
    )


class AuditLogContract:
    """Behaviour shared by every audit log sink."""

    def make_log(self):
        raise NotImplementedError

    def setUp(self):
        self.log = self.make_log()
        self.log.append(_entry(3, "m3", reason="late start"))
        self.log.append(_entry(0, "m0", reason="score typo"))
        self.log.append(_entry(1, "m1", admin_name="Referee Kim"))
        self.log.append(
            _entry(2, "u9", reason="spam", action=AdminAction.BAN_USER)
        )

    def test_append_assigns_id(self):
        stored = self.log.append(_entry(5, "m5"))
        self.assertTrue(stored.id)
        self.assertEqual(stored.target_id, "m5")

    def test_newest_first(self):
        page = self.log.list_entries(AdminLogFilters())
        self.assertEqual(
            [e.target_id for e in page.entries], ["m0", "m1", "u9", "m3"]
        )
        self.assertEqual(page.count, 4)

    def test_date_range(self):
        filters = AdminLogFilters(
            date_from=FIXED_NOW - datetime.timedelta(days=2, hours=1),
            date_to=FIXED_NOW - datetime.timedelta(hours=1),
        )
        page = self.log.list_entries(filters)
        self.assertEqual([e.target_id for e in page.entries], ["m1", "u9"])

    def test_search_is_case_insensitive_over_names_and_reason(self):
        self.assertEqual(
            [e.target_id for e in self.log.list_entries(AdminLogFilters(search="TYPO")).entries],
            ["m0"],
        )
        self.assertEqual(
            [e.target_id for e in self.log.list_entries(AdminLogFilters(search="kim")).entries],
            ["m1"],
        )
        self.assertEqual(
            [e.target_id for e in self.log.list_entries(AdminLogFilters(search="match m3")).entries],
            ["m3"],
        )

    def test_action_filter(self):
        page = self.log.list_entries(AdminLogFilters(action=AdminAction.BAN_USER))
        self.assertEqual([e.target_id for e in page.entries], ["u9"])

    def test_pagination(self):
        page = self.log.list_entries(AdminLogFilters(), page=2, limit=3)
        self.assertEqual([e.target_id for e in page.entries], ["m3"])
        self.assertEqual(page.total_pages, 2)
        self.assertEqual(page.to_dict()["page"], 2)

        empty = self.log.list_entries(AdminLogFilters(), page=5, limit=3)
        self.assertEqual(empty.entries, [])
        self.assertEqual(empty.count, 4)

    def test_entries_round_trip_details(self):
        entry = self.log.list_entries(AdminLogFilters(search="late")).entries[0]
        self.assertEqual(entry.details, {"old_status": "active"})
        self.assertEqual(entry.timestamp, FIXED_NOW - datetime.timedelta(days=3))


class MemoryAuditLogTestCase(AuditLogContract, unittest.TestCase):
    def make_log(self):
        return MemoryAuditLog()


class FirestoreAuditLogTestCase(AuditLogContract, unittest.TestCase):
    def make_log(self):
        patch_mockfirestore()
        self.db = MockFirestore()
        return FirestoreAuditLog(self.db)

    def test_entries_stored_in_admin_logs(self):
        docs = list(self.db.collection("admin_logs").stream())
        self.assertEqual(len(docs), 4)
        self.assertEqual(docs[0].to_dict()["action"], "override_match")


class FirestoreAuditLogFailureTestCase(unittest.TestCase):
    def test_append_failure_is_audit_write_error(self):
        db = MagicMock()
        db.collection.return_value.add.side_effect = google_exceptions.ServiceUnavailable(
            "down"
        )
        log = FirestoreAuditLog(db)
        with self.assertRaises(AuditWriteError) as ctx:
            log.append(_entry(0, "m1"))
        self.assertTrue(ctx.exception.message.startswith("Failed to log admin action"))

    def test_non_api_append_failure_is_audit_write_error(self):
        """Credential refresh and serialisation errors are audit write errors too."""
        for error in (
            google_auth_exceptions.TransportError("token refresh failed"),
            TypeError("Cannot convert to a Firestore Value"),
        ):
            with self.subTest(error=type(error).__name__):
                db = MagicMock()
                db.collection.return_value.add.side_effect = error
                with self.assertRaises(AuditWriteError) as ctx:
                    FirestoreAuditLog(db).append(_entry(0, "m1"))
                self.assertIs(ctx.exception.__cause__, error)

    def test_count_failure_is_store_error(self):
        db = MagicMock()
        aggregation = db.collection.return_value.count.return_value
        aggregation.get.side_effect = google_exceptions.ServiceUnavailable("down")
        log = FirestoreAuditLog(db)
        with self.assertRaises(StoreError):
            log.list_entries(AdminLogFilters())

    def test_search_scan_failure_is_store_error(self):
        db = MagicMock()
        query = db.collection.return_value.order_by.return_value
        query.stream.side_effect = google_exceptions.ServiceUnavailable("down")
        log = FirestoreAuditLog(db)
        with self.assertRaises(StoreError):
            log.list_entries(AdminLogFilters(search="typo"))


class FirestoreAuditLogPagingTestCase(unittest.TestCase):
    """Without a search term the page is cut and counted by Firestore."""

    def setUp(self):
        self.db = MagicMock()
        self.collection = self.db.collection.return_value
        self.log = FirestoreAuditLog(self.db)

    def test_offset_limit_and_count_aggregation(self):
        self.collection.count.return_value.get.return_value = [[MagicMock(value=25)]]
        ordered = self.collection.order_by.return_value
        ordered.offset.return_value.limit.return_value.stream.return_value = []

        page = self.log.list_entries(AdminLogFilters(), page=3, limit=10)

        self.assertEqual(page.count, 25)
        self.assertEqual(page.total_pages, 3)
        ordered.offset.assert_called_once_with(20)
        ordered.offset.return_value.limit.assert_called_once_with(10)
        self.collection.stream.assert_not_called()
        ordered.stream.assert_not_called()

    def test_action_filter_is_applied_in_the_query(self):
        filtered = self.collection.where.return_value
        filtered.count.return_value.get.return_value = [[MagicMock(value=0)]]
        ordered = filtered.order_by.return_value
        ordered.offset.return_value.limit.return_value.stream.return_value = []

        self.log.list_entries(AdminLogFilters(action=AdminAction.BAN_USER))

        field_filter = self.collection.where.call_args.kwargs["filter"]
        self.assertEqual(field_filter.field_path, "action")
        self.assertEqual(field_filter.op_string, "==")
        self.assertEqual(field_filter.value, "ban_user")


class AdminLogPageTestCase(unittest.TestCase):
    def test_total_pages(self):
        self.assertEqual(AdminLogPage([], count=0, page=1, limit=50).total_pages, 0)
        self.assertEqual(AdminLogPage([], count=50, page=1, limit=50).total_pages, 1)
        self.assertEqual(AdminLogPage([], count=51, page=1, limit=50).total_pages, 2)


if __name__ == "__main__":
    unittest.main()
