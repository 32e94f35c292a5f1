"""
Completion service strategies and it does:
- Sends a system + user prompt pair to the model provider
- Returns the raw reply text (parsing happens in json_parse)
- Supports single-shot chat completions and assistant thread/run/poll
- Offers a mock strategy for no-key development

Main purpose:
Central interface for all model calls. No retries are performed here.
"""


import asyncio
from typing import Protocol

import httpx

from preplanner.core.config import Settings, settings
from preplanner.core.logging import get_logger
from preplanner.llm.registry import get_strategy, register

log = get_logger("llm.router")

# run states that are still moving towards a terminal state
_PENDING_RUN_STATES = {"queued", "in_progress", "cancelling"}

# shape surprises while walking a decoded envelope
_ENVELOPE_ERRORS = (KeyError, IndexError, TypeError, AttributeError)


class LLMError(RuntimeError):
    pass


class RunIncompleteError(LLMError):
    def __init__(self, status: str):
        super().__init__(f"Assistant run did not complete (status={status})")
        self.status = status


def _run_id(run: dict) -> str:
    run_id = run.get("id")
    if not isinstance(run_id, str) or not run_id:
        raise LLMError(f"Run response has no id: {run}")
    return run_id


class CompletionService(Protocol):
    async def complete(self, system: str, user: str) -> str: ...


class _HttpCompletionService:
    extra_headers: dict[str, str] = {}

    def __init__(self, cfg: Settings = settings, transport: httpx.AsyncBaseTransport | None = None):
        self.cfg = cfg
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        if not self.cfg.OPENAI_API_KEY:
            raise LLMError("Missing OPENAI_API_KEY. Put it in your .env")
        headers = {"Authorization": f"Bearer {self.cfg.OPENAI_API_KEY}", **self.extra_headers}
        return httpx.AsyncClient(
            base_url=self.cfg.OPENAI_BASE_URL.rstrip("/"),
            headers=headers,
            timeout=httpx.Timeout(self.cfg.LLM_TIMEOUT, connect=10.0),
            transport=self.transport,
        )

    async def _request(self, client: httpx.AsyncClient, method: str, url: str, **kwargs) -> dict:
        try:
            r = await client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise LLMError(f"Completion service unreachable: {e}") from e

        if r.status_code >= 400:
            raise LLMError(f"Completion service error {r.status_code}: {r.text}")
        try:
            data = r.json()
        except ValueError as e:
            raise LLMError(f"Unexpected completion service response: {r.text[:200]}") from e
        if not isinstance(data, dict):
            raise LLMError(f"Unexpected completion service response: {r.text[:200]}")
        return data


@register("chat")
class ChatCompletionService(_HttpCompletionService):
    async def complete(self, system: str, user: str) -> str:
        payload = {
            "model": self.cfg.LLM_MODEL,
            "temperature": self.cfg.LLM_TEMPERATURE,
            "response_format": {"type": "json_object"},
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
        }
        async with self._client() as client:
            data = await self._request(client, "POST", "/chat/completions", json=payload)

        try:
            choices = data["choices"]
            if isinstance(choices, list) and not choices:
                return ""
            return choices[0]["message"]["content"] or ""
        except _ENVELOPE_ERRORS as e:
            raise LLMError(f"Unexpected completion response: {data}") from e


@register("assistant")
class AssistantCompletionService(_HttpCompletionService):
    """
    Thread based variant: create a thread, post the user prompt, start a run
    against the configured assistant and poll it until it reaches a terminal
    state (bounded by RUN_POLL_MAX_ATTEMPTS), then read the latest reply.
    """

    extra_headers = {"OpenAI-Beta": "assistants=v2"}

    async def create_thread(self, client: httpx.AsyncClient) -> str:
        data = await self._request(client, "POST", "/threads", json={})
        if not data.get("id"):
            raise LLMError(f"Thread creation returned no id: {data}")
        return data["id"]

    async def post_message(self, client: httpx.AsyncClient, thread_id: str, text: str) -> None:
        await self._request(
            client, "POST", f"/threads/{thread_id}/messages", json={"role": "user", "content": text}
        )

    async def run_and_await(
        self, client: httpx.AsyncClient, thread_id: str, assistant_id: str, instructions: str = ""
    ) -> str:
        payload = {"assistant_id": assistant_id}
        if instructions:
            payload["additional_instructions"] = instructions
        run = await self._request(client, "POST", f"/threads/{thread_id}/runs", json=payload)

        run_id = _run_id(run)
        status = str(run.get("status") or "")
        for attempt in range(self.cfg.RUN_POLL_MAX_ATTEMPTS):
            if status not in _PENDING_RUN_STATES:
                break
            await asyncio.sleep(self.cfg.RUN_POLL_INTERVAL)
            run = await self._request(client, "GET", f"/threads/{thread_id}/runs/{run_id}")
            status = str(run.get("status") or "")
            log.debug(f"run {run_id} status={status} (poll {attempt+1}/{self.cfg.RUN_POLL_MAX_ATTEMPTS})")
        return status

    async def list_messages(self, client: httpx.AsyncClient, thread_id: str) -> str:
        data = await self._request(
            client, "GET", f"/threads/{thread_id}/messages", params={"order": "desc", "limit": 20}
        )
        try:
            for msg in data.get("data") or []:
                if msg.get("role") != "assistant":
                    continue
                parts = [
                    part["text"]["value"]
                    for part in msg.get("content") or []
                    if part.get("type") == "text"
                ]
                return "".join(parts)
        except _ENVELOPE_ERRORS as e:
            raise LLMError(f"Unexpected message list: {data}") from e
        return ""

    async def complete(self, system: str, user: str) -> str:
        if not self.cfg.OPENAI_ASSISTANT_ID:
            raise LLMError("Missing OPENAI_ASSISTANT_ID for the assistant provider")

        async with self._client() as client:
            thread_id = await self.create_thread(client)
            await self.post_message(client, thread_id, user)
            status = await self.run_and_await(
                client, thread_id, self.cfg.OPENAI_ASSISTANT_ID, instructions=system
            )
            if status != "completed":
                log.warning(f"Assistant run on thread {thread_id} ended with status={status}")
                raise RunIncompleteError(status)
            return await self.list_messages(client, thread_id)


@register("mock")
class MockCompletionService:
    def __init__(self, cfg: Settings = settings, reply: str = "{}"):
        self.cfg = cfg
        self.reply = reply

    async def complete(self, system: str, user: str) -> str:
        return self.reply


class UnavailableCompletionService:
    """Stands in for a misconfigured provider so handlers still answer with structured errors."""

    def __init__(self, reason: str):
        self.reason = reason

    async def complete(self, system: str, user: str) -> str:
        raise LLMError(self.reason)


def get_completion_service() -> CompletionService:
    try:
        cls = get_strategy(settings.LLM_PROVIDER)
    except KeyError as e:
        log.error(f"Completion service unavailable: {e.args[0]}")
        return UnavailableCompletionService(e.args[0])
    return cls(settings)
