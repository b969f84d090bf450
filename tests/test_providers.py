import json
import sys
import unittest
from pathlib import Path
from types import SimpleNamespace

import httpx

PROJECT_ROOT = Path(__file__).resolve().parents[1]
for path in (PROJECT_ROOT, Path(__file__).resolve().parent):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from imagineer.ai.config import AIConfig  # noqa: E402
from imagineer.ai.errors import describe_backend_error  # noqa: E402
from imagineer.ai.factory import get_ai_client  # noqa: E402
from imagineer.ai.providers.gemini_provider import GeminiProvider  # noqa: E402
from imagineer.ai.providers.openai_provider import to_json_schema  # noqa: E402
from imagineer.ai.providers.relay_provider import RelayProvider  # noqa: E402
from imagineer.core.errors import ModelRequestFailure  # noqa: E402
from imagineer.prompts.report_prompt import SYSTEM_INSTRUCTION, ReportRequest, report_schema  # noqa: E402
from sample_data import model_response  # noqa: E402

REQUEST = ReportRequest(
    system_instruction=SYSTEM_INSTRUCTION,
    user_content="USER DATA:\n- Name: Dana",
    response_schema=report_schema(),
)


class RelayProviderTests(unittest.IsolatedAsyncioTestCase):
    async def _call(self, handler, form_data=None):
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            provider = RelayProvider("http://relay.internal/", client=client)
            return await provider.generate_json(REQUEST, form_data=form_data)

    async def test_posts_prompt_and_returns_body(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=model_response())

        text = await self._call(handler, form_data={"name": "Dana"})
        self.assertEqual(json.loads(text)["personaTitle"], "Signal Sculptor")
        self.assertEqual(seen["url"], "http://relay.internal/api/generate")
        self.assertEqual(
            set(seen["body"]), {"formData", "systemInstruction", "userContent", "schema"}
        )
        self.assertEqual(seen["body"]["formData"], {"name": "Dana"})

    async def test_error_body_is_surfaced_verbatim(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, json={"error": "API key is not configured on the server."})

        with self.assertRaises(ModelRequestFailure) as ctx:
            await self._call(handler)
        self.assertEqual(str(ctx.exception), "API key is not configured on the server.")

    async def test_error_without_json_body(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="Bad Gateway")

        with self.assertRaises(ModelRequestFailure) as ctx:
            await self._call(handler)
        self.assertEqual(str(ctx.exception), "HTTP error! status: 502")

    async def test_transport_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with self.assertRaises(ModelRequestFailure):
            await self._call(handler)


class GeminiProviderTests(unittest.IsolatedAsyncioTestCase):
    def provider_returning(self, response=None, error=None):
        provider = GeminiProvider(model="gemini-2.5-flash", api_key="test-key")

        async def generate_content(**kwargs):
            self.kwargs = kwargs
            if error is not None:
                raise error
            return response

        provider._client = SimpleNamespace(aio=SimpleNamespace(models=SimpleNamespace(generate_content=generate_content)))
        return provider

    async def test_returns_text_and_sends_schema(self):
        provider = self.provider_returning(SimpleNamespace(prompt_feedback=None, text='{"ok": true}'))
        self.assertEqual(await provider.generate_json(REQUEST), '{"ok": true}')
        config = self.kwargs["config"]
        self.assertEqual(config.response_mime_type, "application/json")
        self.assertEqual(self.kwargs["model"], "gemini-2.5-flash")
        self.assertEqual(self.kwargs["contents"], REQUEST.user_content)

    async def test_block_reason_becomes_failure(self):
        feedback = SimpleNamespace(block_reason="SAFETY", safety_ratings=[])
        provider = self.provider_returning(SimpleNamespace(prompt_feedback=feedback, text=None))
        with self.assertRaises(ModelRequestFailure) as ctx:
            await provider.generate_json(REQUEST)
        self.assertEqual(ctx.exception.code, "content_blocked")
        self.assertIn("SAFETY", str(ctx.exception))

    async def test_empty_text_becomes_failure(self):
        provider = self.provider_returning(SimpleNamespace(prompt_feedback=None, text=""))
        with self.assertRaises(ModelRequestFailure) as ctx:
            await provider.generate_json(REQUEST)
        self.assertEqual(ctx.exception.code, "empty_response")

    async def test_sdk_error_is_translated(self):
        provider = self.provider_returning(error=RuntimeError("400 API key not valid. Please pass a valid API key."))
        with self.assertRaises(ModelRequestFailure) as ctx:
            await provider.generate_json(REQUEST)
        self.assertIn("invalid", str(ctx.exception))


class ProviderHelpersTests(unittest.TestCase):
    def test_openai_schema_translation(self):
        converted = to_json_schema(report_schema())
        self.assertEqual(converted["type"], "object")
        self.assertFalse(converted["additionalProperties"])
        strengths = converted["properties"]["topStrengths"]
        self.assertEqual(strengths["type"], "array")
        self.assertEqual(strengths["items"]["type"], "object")
        self.assertEqual(converted["properties"]["quickWins"]["items"]["type"], "string")

    def test_describe_backend_error(self):
        self.assertIn("billing", describe_backend_error(RuntimeError("Billing account disabled")))
        self.assertIn("permissions", describe_backend_error(RuntimeError("403 permission denied")))
        self.assertTrue(describe_backend_error(RuntimeError("boom")).endswith("Details: boom"))

    def test_factory_requires_credentials(self):
        with self.assertRaises(RuntimeError):
            get_ai_client(AIConfig(provider="gemini", model="gemini-2.5-flash", temperature=0.5))
        with self.assertRaises(ValueError):
            get_ai_client(AIConfig(provider="llama", model="x", temperature=0.5))

    def test_factory_builds_relay_client(self):
        client = get_ai_client(AIConfig(provider="relay", model="unused", temperature=0.5))
        self.assertIsInstance(client, RelayProvider)


if __name__ == "__main__":
    unittest.main()
