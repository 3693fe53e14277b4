"""Chat-completions provider for OpenAI and OpenAI-compatible servers."""

from typing import Any

import httpx

from codeguess.config import get_settings
from codeguess.errors import JudgeError
from codeguess.providers.base import ModelResponse


class OpenAICompatProvider:
    def __init__(
        self,
        model: str,
        *,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout_seconds: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.model = model
        self._base_url = base_url
        self._api_key = api_key
        self._timeout_seconds = timeout_seconds
        self._transport = transport

    @staticmethod
    def _coerce_text(value: object) -> str:
        if isinstance(value, str):
            return value
        if isinstance(value, list):
            chunks: list[str] = []
            for item in value:
                if isinstance(item, str):
                    chunks.append(item)
                elif isinstance(item, dict):
                    text = item.get("text")
                    if isinstance(text, str):
                        chunks.append(text)
            return "".join(chunks)
        return ""

    def _resolved_base_url(self) -> str:
        base_url = self._base_url or get_settings().judge_base_url
        return base_url.rstrip("/")

    def _headers(self) -> dict[str, str]:
        api_key = self._api_key if self._api_key is not None else get_settings().judge_api_key
        headers = {"Content-Type": "application/json"}
        if api_key.strip():
            headers["Authorization"] = f"Bearer {api_key.strip()}"
        return headers

    @staticmethod
    def _parse_response(payload: dict[str, Any]) -> ModelResponse:
        choices = payload.get("choices")
        if not isinstance(choices, list) or not choices:
            raise JudgeError("chat completion response missing choices", retryable=False)
        first = choices[0]
        if not isinstance(first, dict):
            raise JudgeError("chat completion choice malformed", retryable=False)
        message = first.get("message")
        if not isinstance(message, dict):
            raise JudgeError("chat completion message missing", retryable=False)
        content = OpenAICompatProvider._coerce_text(message.get("content"))
        return ModelResponse(text=content, model=str(payload.get("model") or ""))

    async def generate(
        self,
        messages: list[dict[str, str]],
        temperature: float = 0.7,
        max_tokens: int = 300,
        json_mode: bool = False,
    ) -> ModelResponse:
        body: dict[str, object] = {
            "model": self.model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        if json_mode:
            body["response_format"] = {"type": "json_object"}
        endpoint = f"{self._resolved_base_url()}/chat/completions"
        timeout_seconds = self._timeout_seconds or max(5, int(get_settings().judge_timeout_seconds))
        try:
            async with httpx.AsyncClient(
                timeout=timeout_seconds, transport=self._transport
            ) as client:
                response = await client.post(endpoint, json=body, headers=self._headers())
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            raise JudgeError(
                f"chat completion failed ({status_code})",
                retryable=status_code == 429 or status_code >= 500,
            ) from exc
        except httpx.HTTPError as exc:
            raise JudgeError(f"chat completion request failed: {exc}") from exc
        try:
            payload = response.json()
        except ValueError as exc:
            raise JudgeError("chat completion response is not JSON", retryable=False) from exc
        if not isinstance(payload, dict):
            raise JudgeError("chat completion response is not an object", retryable=False)
        return self._parse_response(payload)

    async def health_check(self) -> bool:
        endpoint = f"{self._resolved_base_url()}/models"
        try:
            async with httpx.AsyncClient(timeout=10, transport=self._transport) as client:
                response = await client.get(endpoint, headers=self._headers())
            return response.status_code < 400
        except Exception:
            return False
