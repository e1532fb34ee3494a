# tests/test_runner.py

"""Tests for the headless CLI runner."""

import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

from src.cli.runner import run_tracker, show_status
from src.config.settings import TrackerConfig
from src.models.product import ProductSnapshot
from src.scrapers.errors import ResponseFormatError, SessionError, TransportError
from src.services.tracker import RunResult
from src.storage.snapshot_store import SnapshotStore

TRACKER_PATH = "src.cli.runner.RestockTracker"


class TestRunner(unittest.TestCase):
    """Exit codes and status output."""

    def setUp(self) -> None:
        self.tmp_dir = Path(tempfile.mkdtemp())
        self.config = TrackerConfig(
            messaging_destination="-1001",
            messaging_credential="123:abc",
            region_id="store-1",
            state_file_path=self.tmp_dir / "stock_data.json",
        )

    @patch(TRACKER_PATH)
    def test_success_exit_zero(self, mock_tracker_cls: MagicMock) -> None:
        mock_tracker_cls.return_value.run.return_value = RunResult(
            product_count=3
        )
        self.assertEqual(run_tracker(self.config), 0)

    @patch(TRACKER_PATH)
    def test_fatal_errors_exit_one(self, mock_tracker_cls: MagicMock) -> None:
        for exc in (
            SessionError("no tid"),
            TransportError("timeout"),
            ResponseFormatError("no data"),
        ):
            with self.subTest(exc=type(exc).__name__):
                mock_tracker_cls.return_value.run.side_effect = exc
                with self.assertLogs("restock_tracker.cli", level="ERROR"):
                    self.assertEqual(run_tracker(self.config), 1)

    @patch(TRACKER_PATH)
    def test_flags_forwarded(self, mock_tracker_cls: MagicMock) -> None:
        mock_tracker_cls.return_value.run.return_value = RunResult()
        run_tracker(self.config, dry_run=True, use_cookie_cache=False)
        mock_tracker_cls.assert_called_once_with(
            self.config, use_cookie_cache=False, dry_run=True
        )

    @patch(TRACKER_PATH)
    def test_unexpected_errors_propagate(
        self, mock_tracker_cls: MagicMock
    ) -> None:
        mock_tracker_cls.return_value.run.side_effect = RuntimeError("bug")
        with self.assertRaises(RuntimeError):
            run_tracker(self.config)

    @patch("src.cli.runner.Console")
    def test_status_prints_table(self, mock_console_cls: MagicMock) -> None:
        SnapshotStore(self.config.state_file_path).save(
            {
                "X1": ProductSnapshot(
                    sku="X1",
                    name="Protein Shake",
                    url="https://shop.amul.com/en/product/x1",
                    price="NA",
                    inventory_quantity=10,
                    low_stock_threshold=5,
                    last_checked="2026-10-19 10:00:00",
                )
            }
        )
        self.assertEqual(show_status(self.config), 0)
        printed = [
            c.args[0] for c in mock_console_cls.return_value.print.call_args_list
        ]
        self.assertIn("Last checked: 2026-10-19 10:00:00", printed)

    def test_status_without_state(self) -> None:
        self.assertEqual(show_status(self.config), 0)


if __name__ == "__main__":
    unittest.main()
