"""Tests for app.core.log: UTC timestamps and rendered request context."""

import logging
import unittest

from app.core.log import build_formatter


class TestFormatter(unittest.TestCase):
    def make_record(self, msg: str, *args: object) -> logging.LogRecord:
        record = logging.LogRecord("app.main", logging.ERROR, __file__, 1, msg, args, None)
        record.created = 0.0
        return record

    def test_timestamp_is_utc(self) -> None:
        line = build_formatter().format(self.make_record("boom"))
        self.assertTrue(line.startswith("1970-01-01T00:00:00Z ERROR app.main boom"))

    def test_message_args_rendered(self) -> None:
        record = self.make_record(
            "Database unavailable: %s %s: %s", "POST", "/api/v1/auth/login", "Failed to save user"
        )
        self.assertIn(
            "Database unavailable: POST /api/v1/auth/login: Failed to save user",
            build_formatter().format(record),
        )


if __name__ == "__main__":
    unittest.main()
