"""Tests for turning transport outcomes into transcript messages."""

import unittest

from chatbot.constants import FAILURE_NOTICE
from chatbot.diagnostics import DiagnosticChannel
from chatbot.errors import ApiError, MalformedResponse, NetworkFailure
from chatbot.response_handler import ResponseHandler, message_from_body
from chatbot.state import Role


class MessageFromBodyTests(unittest.TestCase):
    def test_first_segment_text_is_used(self) -> None:
        message = message_from_body({"content": [{"text": "Hello", "type": "text"}, {"text": "ignored"}], "id": "x"})
        self.assertIs(message.role, Role.ASSISTANT)
        self.assertEqual(message.content, "Hello")

    def test_missing_or_empty_content_is_malformed(self) -> None:
        for body in ({}, {"content": []}, {"content": [{"type": "tool_use"}]}, ["Hello"], None):
            with self.subTest(body=body):
                with self.assertRaises(MalformedResponse):
                    message_from_body(body)


class ResponseHandlerTests(unittest.TestCase):
    def setUp(self) -> None:
        self.diagnostics = DiagnosticChannel()
        self.handler = ResponseHandler(self.diagnostics)

    def test_success_does_not_report(self) -> None:
        message = self.handler.on_success({"content": [{"text": "Hi"}]})
        self.assertEqual(message.content, "Hi")
        self.assertEqual(self.diagnostics.records, [])

    def test_api_error_becomes_generic_notice(self) -> None:
        with self.assertLogs("chatbot.diagnostics", level="ERROR") as logs:
            message = self.handler.on_failure(ApiError(500, "boom"), generation=0, model="m")

        self.assertEqual(message.content, FAILURE_NOTICE)
        self.assertNotIn("boom", message.content)
        self.assertIs(message.role, Role.ASSISTANT)
        record = self.diagnostics.records[0]
        self.assertEqual(record.kind, "ApiError")
        self.assertEqual(record.status, 500)
        self.assertIn("boom", record.detail)
        self.assertIn("boom", logs.output[0])

    def test_malformed_success_is_treated_as_failure(self) -> None:
        with self.assertLogs("chatbot.diagnostics", level="ERROR"):
            message = self.handler.on_success({"unexpected": True})

        self.assertEqual(message.content, FAILURE_NOTICE)
        self.assertEqual(self.diagnostics.records[0].kind, "MalformedResponse")

    def test_network_failure_recorded(self) -> None:
        with self.assertLogs("chatbot.diagnostics", level="ERROR"):
            self.handler.on_failure(NetworkFailure("ConnectError: refused"))
        self.assertEqual(self.diagnostics.records[0].kind, "NetworkFailure")
        self.assertIsNone(self.diagnostics.records[0].status)


class DiagnosticChannelTests(unittest.TestCase):
    def test_keeps_only_recent_records(self) -> None:
        channel = DiagnosticChannel(max_records=2)
        with self.assertLogs("chatbot.diagnostics", level="ERROR"):
            for index in range(3):
                channel.report_failure(NetworkFailure(f"failure {index}"))
        self.assertEqual([record.detail for record in channel.records], ["failure 1", "failure 2"])


if __name__ == "__main__":
    unittest.main()
