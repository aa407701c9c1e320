"""Unit tests for log file discovery."""

import os

from infrastructure.logging import find_latest_log_file


class TestFindLatestLogFile:
    def test_missing_directory(self, tmp_path):
        assert find_latest_log_file(str(tmp_path / "nope")) is None

    def test_no_logs(self, tmp_path):
        (tmp_path / "other.txt").write_text("x", encoding="utf-8")

        assert find_latest_log_file(str(tmp_path)) is None

    def test_picks_most_recent(self, tmp_path):
        older = tmp_path / "app_20240101.log"
        newer = tmp_path / "app_20240102.log"
        older.write_text("a", encoding="utf-8")
        newer.write_text("b", encoding="utf-8")
        os.utime(older, (1_000_000, 1_000_000))
        os.utime(newer, (2_000_000, 2_000_000))

        assert find_latest_log_file(str(tmp_path)) == newer
