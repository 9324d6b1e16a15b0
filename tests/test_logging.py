"""Tests for app.core.logging: UTC timestamps."""

import logging
import unittest

from app.core.logging import build_formatter


class TestFormatter(unittest.TestCase):

    def _record(self, created: float) -> logging.LogRecord:
        record = logging.LogRecord("app.test", logging.INFO, __file__, 1, "hello", None, None)
        record.created = created
        return record

    def test_asctime_is_utc(self) -> None:
        formatter = build_formatter()
        self.assertEqual(formatter.formatTime(self._record(0.0), formatter.datefmt), "1970-01-01T00:00:00Z")
        # 2024-06-01T12:00:00Z, a date where most zones are off UTC by DST
        self.assertEqual(
            formatter.formatTime(self._record(1717243200.0), formatter.datefmt),
            "2024-06-01T12:00:00Z",
        )

    def test_line_layout(self) -> None:
        line = build_formatter().format(self._record(0.0))
        self.assertEqual(line, "1970-01-01T00:00:00Z INFO app.test hello")


if __name__ == "__main__":
    unittest.main()
