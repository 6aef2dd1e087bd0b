"""Tests for the terminal loop using a stubbed transport and scripted input."""

from __future__ import annotations

import io
import sys
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest import mock

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from chatbot import ChatSession  # noqa: E402
from scripts.cli import run  # noqa: E402


class SwitchingTransport:
    """Answers every request and switches the session's model mid-flight."""

    def __init__(self) -> None:
        self.session = None
        self.requests = []

    async def send(self, request):
        self.requests.append(request)
        self.session.select_model("claude-3-opus-20240229")
        return {"content": [{"text": "Hello"}]}


class CliRunTests(unittest.IsolatedAsyncioTestCase):
    async def test_reply_labelled_with_model_used_for_request(self) -> None:
        transport = SwitchingTransport()
        session = ChatSession(transport, api_key="test-key", model_id="claude-3-haiku-20240307")
        transport.session = session
        output = io.StringIO()

        with mock.patch("builtins.input", side_effect=["hello", "exit"]), redirect_stdout(output):
            await run(session)

        self.assertIn("Claude 3 Haiku: Hello", output.getvalue())
        self.assertNotIn("Claude 3 Opus: Hello", output.getvalue())
        self.assertEqual(transport.requests[0].model, "claude-3-haiku-20240307")

    async def test_clear_and_model_commands(self) -> None:
        transport = SwitchingTransport()
        session = ChatSession(transport, api_key="test-key")
        transport.session = session
        output = io.StringIO()

        with mock.patch("builtins.input", side_effect=["/model claude-3-haiku-20240307", "/clear", "quit"]), redirect_stdout(output):
            await run(session)

        self.assertEqual(session.selected_model_id, "claude-3-haiku-20240307")
        self.assertIn("Chat cleared.", output.getvalue())
        self.assertEqual(transport.requests, [])


if __name__ == "__main__":
    unittest.main()
