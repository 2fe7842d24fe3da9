import unittest
from datetime import datetime, timezone

from gdriveblobs.util.time import parse_rfc3339, parse_rfc3339_or_none


class TestUtilTime(unittest.TestCase):
    def test_parse_rfc3339_z(self) -> None:
        dt = parse_rfc3339("2025-01-01T12:34:56Z")
        self.assertEqual(dt.tzinfo, timezone.utc)
        self.assertEqual(dt, datetime(2025, 1, 1, 12, 34, 56, tzinfo=timezone.utc))

    def test_parse_rfc3339_fractional_z(self) -> None:
        dt = parse_rfc3339("2025-01-01T12:34:56.123000Z")
        self.assertEqual(
            dt, datetime(2025, 1, 1, 12, 34, 56, 123000, tzinfo=timezone.utc)
        )

    def test_parse_rfc3339_offset_converts_to_utc(self) -> None:
        dt = parse_rfc3339("2025-01-01T12:34:56+09:00")
        self.assertEqual(dt.tzinfo, timezone.utc)
        self.assertEqual(dt, datetime(2025, 1, 1, 3, 34, 56, tzinfo=timezone.utc))

    def test_parse_rfc3339_rejects_naive_and_empty(self) -> None:
        with self.assertRaises(ValueError):
            parse_rfc3339("2025-01-01T12:34:56")
        with self.assertRaises(ValueError):
            parse_rfc3339("")

    def test_parse_rfc3339_or_none(self) -> None:
        self.assertIsNone(parse_rfc3339_or_none(None))
        self.assertIsNone(parse_rfc3339_or_none("yesterday"))
        self.assertIsNotNone(parse_rfc3339_or_none("2025-01-01T00:00:00Z"))


if __name__ == "__main__":
    unittest.main()
