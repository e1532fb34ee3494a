# tests/test_telegram.py

"""Tests for the Telegram messenger using a mocked HTTP session."""

import unittest
from unittest.mock import MagicMock

from src.notifiers.telegram import TelegramMessenger


def _resp(status: int, body: object) -> MagicMock:
    mock_resp = MagicMock()
    mock_resp.status_code = status
    mock_resp.json.return_value = body
    return mock_resp


class TestTelegramMessenger(unittest.TestCase):
    """send() contract: None on success, diagnostic on failure."""

    def setUp(self) -> None:
        self.mock_session = MagicMock()
        self.messenger = TelegramMessenger("123:abc", session=self.mock_session)

    def test_success_returns_none(self) -> None:
        self.mock_session.post.return_value = _resp(200, {"ok": True})
        self.assertIsNone(self.messenger.send("-1001", "hello"))

    def test_payload(self) -> None:
        self.mock_session.post.return_value = _resp(200, {"ok": True})
        self.messenger.send("-1001", "hello", no_link_preview=True, fmt="html")

        call = self.mock_session.post.call_args
        self.assertEqual(
            call.args[0], "https://api.telegram.org/bot123:abc/sendMessage"
        )
        data = call.kwargs["data"]
        self.assertEqual(data["chat_id"], "-1001")
        self.assertEqual(data["text"], "hello")
        self.assertEqual(data["parse_mode"], "HTML")
        self.assertEqual(data["disable_web_page_preview"], "true")

    def test_plain_format_omits_parse_mode(self) -> None:
        self.mock_session.post.return_value = _resp(200, {"ok": True})
        self.messenger.send("-1001", "hi", fmt="plain", no_link_preview=False)

        data = self.mock_session.post.call_args.kwargs["data"]
        self.assertNotIn("parse_mode", data)
        self.assertEqual(data["disable_web_page_preview"], "false")

    def test_api_error_returns_description(self) -> None:
        self.mock_session.post.return_value = _resp(
            400, {"ok": False, "description": "Bad Request: chat not found"}
        )
        self.assertEqual(
            self.messenger.send("-1001", "hello"),
            "Bad Request: chat not found",
        )

    def test_http_error_without_json(self) -> None:
        mock_resp = MagicMock()
        mock_resp.status_code = 502
        mock_resp.json.side_effect = ValueError("no json")
        self.mock_session.post.return_value = mock_resp
        self.assertEqual(
            self.messenger.send("-1001", "hello"), "Telegram returned HTTP 502"
        )

    def test_transport_error_returns_diagnostic(self) -> None:
        self.mock_session.post.side_effect = ConnectionError("unreachable")
        result = self.messenger.send("-1001", "hello")
        self.assertIsNotNone(result)
        assert result is not None
        self.assertIn("unreachable", result)

    def test_missing_token(self) -> None:
        messenger = TelegramMessenger("", session=self.mock_session)
        self.assertFalse(messenger.enabled)
        self.assertIsNotNone(messenger.send("-1001", "hello"))
        self.mock_session.post.assert_not_called()


if __name__ == "__main__":
    unittest.main()
