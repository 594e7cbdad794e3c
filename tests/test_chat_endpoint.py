from __future__ import annotations

import json
import sys
import unittest
from pathlib import Path
from unittest import mock

from fastapi.testclient import TestClient

PROJECT_ROOT = Path(__file__).resolve().parent.parent
API_CODE_PATH = PROJECT_ROOT / "api-code"
for path in (PROJECT_ROOT, API_CODE_PATH):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from app_main import create_app
from errors import INVALID_MESSAGES_ERROR
from settings import Settings


class ChatEndpointTest(unittest.TestCase):
    def setUp(self) -> None:
        patcher = mock.patch("services.chat_service.genai")
        self.genai = patcher.start()
        self.addCleanup(patcher.stop)
        self.model = self.genai.GenerativeModel.return_value

        self.settings = Settings(google_api_key="test-key", public_dir=PROJECT_ROOT / "public")
        self.client = TestClient(create_app(self.settings))

    def test_relays_every_turn_in_one_call(self) -> None:
        self.model.generate_content.return_value = {
            "response": {"candidate": [{"content": {"part": [{"text": "hello"}]}}]}
        }
        messages = [
            {"role": "user", "content": "Hi"},
            {"role": "model", "content": "Hey there"},
            {"role": "user", "content": "Tell me a joke"},
        ]

        response = self.client.post("/api/chat", json={"messages": messages})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"result": "hello"})
        self.model.generate_content.assert_called_once()
        (contents,), _ = self.model.generate_content.call_args
        self.assertEqual(len(contents), len(messages))
        self.assertEqual(
            [(turn["role"], turn["parts"]) for turn in contents],
            [(message["role"], [message["content"]]) for message in messages],
        )

    def test_non_array_messages_are_rejected_without_calling_gemini(self) -> None:
        for bad_value in ("hello", 42, None, {"role": "user", "content": "Hi"}):
            with self.subTest(messages=bad_value):
                response = self.client.post("/api/chat", json={"messages": bad_value})

                self.assertEqual(response.status_code, 400)
                self.assertEqual(response.json(), {"error": INVALID_MESSAGES_ERROR})

        self.model.generate_content.assert_not_called()

    def test_missing_messages_field_is_rejected(self) -> None:
        response = self.client.post("/api/chat", json={})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": INVALID_MESSAGES_ERROR})
        self.model.generate_content.assert_not_called()

    def test_empty_messages_array_is_rejected(self) -> None:
        response = self.client.post("/api/chat", json={"messages": []})

        self.assertEqual(response.status_code, 400)
        self.assertIn("error", response.json())
        self.model.generate_content.assert_not_called()

    def test_malformed_message_element_is_rejected(self) -> None:
        response = self.client.post("/api/chat", json={"messages": [{"role": "user"}]})

        self.assertEqual(response.status_code, 400)
        self.assertIn("messages.0.content", response.json()["error"])
        self.model.generate_content.assert_not_called()

    def test_invalid_json_body_is_rejected(self) -> None:
        response = self.client.post(
            "/api/chat",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        self.assertEqual(response.status_code, 400)
        self.assertIn("error", response.json())
        self.model.generate_content.assert_not_called()

    def test_unrecognized_response_shape_is_stringified(self) -> None:
        raw = {"candidates": [{"content": {"parts": [{"text": "unreached"}]}}]}
        self.model.generate_content.return_value = raw

        response = self.client.post(
            "/api/chat", json={"messages": [{"role": "user", "content": "Hi"}]}
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"result": json.dumps(raw, indent=2)})

    def test_gemini_failure_returns_500_and_is_logged(self) -> None:
        self.model.generate_content.side_effect = RuntimeError("quota exceeded")

        with self.assertLogs("gemini-relay.chat", level="ERROR") as captured:
            response = self.client.post(
                "/api/chat", json={"messages": [{"role": "user", "content": "Hi"}]}
            )

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "quota exceeded"})
        self.assertIn("Error in /api/chat", captured.output[0])

        # the app keeps serving after a failure
        self.model.generate_content.side_effect = None
        self.model.generate_content.return_value = {
            "candidate": [{"content": {"parts": [{"text": "back"}]}}]
        }
        response = self.client.post(
            "/api/chat", json={"messages": [{"role": "user", "content": "Hi"}]}
        )
        self.assertEqual(response.json(), {"result": "back"})

    def test_blank_exception_message_uses_generic_error(self) -> None:
        self.model.generate_content.side_effect = RuntimeError()

        with self.assertLogs("gemini-relay.chat", level="ERROR"):
            response = self.client.post(
                "/api/chat", json={"messages": [{"role": "user", "content": "Hi"}]}
            )

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "Internal Server Error"})


class AppWiringTest(unittest.TestCase):
    def test_missing_api_key_reports_error(self) -> None:
        client = TestClient(create_app(Settings(public_dir=PROJECT_ROOT / "public")))

        with self.assertLogs("gemini-relay.chat", level="ERROR"):
            response = client.post(
                "/api/chat", json={"messages": [{"role": "user", "content": "Hi"}]}
            )

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "GOOGLE_API_KEY is not configured."})

    def test_healthz_reports_key_state(self) -> None:
        client = TestClient(create_app(Settings(public_dir=PROJECT_ROOT / "public")))

        payload = client.get("/healthz").json()

        self.assertEqual(payload["status"], "degraded")
        self.assertFalse(payload["api_key_configured"])
        self.assertEqual(payload["model"], "gemini-2.5-flash")

    def test_static_files_are_served_verbatim(self) -> None:
        client = TestClient(create_app(Settings(public_dir=PROJECT_ROOT / "public")))

        index = client.get("/")
        script = client.get("/script.js")

        self.assertEqual(index.status_code, 200)
        self.assertIn('id="chat-form"', index.text)
        self.assertEqual(script.status_code, 200)
        self.assertEqual(script.content, (PROJECT_ROOT / "public" / "script.js").read_bytes())

    def test_cors_headers_follow_settings(self) -> None:
        settings = Settings(
            public_dir=PROJECT_ROOT / "public",
            cors_allow_origins="http://localhost:5173",
        )
        client = TestClient(create_app(settings))

        response = client.options(
            "/api/chat",
            headers={
                "Origin": "http://localhost:5173",
                "Access-Control-Request-Method": "POST",
            },
        )

        self.assertEqual(
            response.headers.get("access-control-allow-origin"), "http://localhost:5173"
        )


if __name__ == "__main__":
    unittest.main()
