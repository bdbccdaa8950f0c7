"""
Species chat service — proxies a conversation to an OpenAI-compatible
chat-completion endpoint.

One upstream call per invocation, no retries. Every failure degrades to a
fixed user-safe fallback string instead of raising:

  non-2xx status               → FALLBACK_REQUEST_FAILED
  body shape mismatch          → FALLBACK_UNEXPECTED_RESPONSE
  empty content                → FALLBACK_EMPTY_RESPONSE
  transport, timeout, bad JSON → FALLBACK_CONNECTION_FAILED
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Optional, Sequence

import httpx
from pydantic import ValidationError

from app.schemas.chat import ChatMessage, CompletionResponse
from app.utils.prompts import SPECIES_SYSTEM_PROMPT, build_chat_messages

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 60.0

FALLBACK_REQUEST_FAILED = "Sorry, I couldn't process your request. Please try again."
FALLBACK_UNEXPECTED_RESPONSE = "Sorry, I received an unexpected response. Please try again."
FALLBACK_EMPTY_RESPONSE = "Sorry, I received an empty response. Please try again."
FALLBACK_CONNECTION_FAILED = "Sorry, I couldn't connect to the service. Please try again."


class SpeciesChatService:
    """Stateless chat proxy; safe to share across concurrent requests."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_url: str,
        model: str,
        system_prompt: str = SPECIES_SYSTEM_PROMPT,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        api_key: Optional[str] = None,
    ) -> None:
        self._client = client
        self._api_url = api_url
        self._model = model
        self._system_prompt = system_prompt
        self._timeout_seconds = timeout_seconds
        self._headers = {"Content-Type": "application/json"}
        if api_key:
            self._headers["Authorization"] = f"Bearer {api_key}"

    @property
    def model(self) -> str:
        return self._model

    async def generate_response(
        self,
        message: str,
        history: Sequence[ChatMessage] = (),
    ) -> str:
        """Return the assistant reply for ``message``, or a fallback string."""
        payload = {
            "model": self._model,
            "messages": build_chat_messages(self._system_prompt, history, message),
        }
        started = time.monotonic()

        try:
            response = await asyncio.wait_for(
                self._client.post(
                    self._api_url,
                    json=payload,
                    headers=self._headers,
                    timeout=self._timeout_seconds,
                ),
                timeout=self._timeout_seconds,
            )

            if not response.is_success:
                logger.warning(
                    "Upstream '%s' returned HTTP %d after %.2fs",
                    self._model,
                    response.status_code,
                    time.monotonic() - started,
                )
                return FALLBACK_REQUEST_FAILED

            # A body that is not JSON raises here and takes the connection path.
            body = response.json()
            try:
                completion = CompletionResponse.model_validate(body)
            except ValidationError as exc:
                logger.warning(
                    "Upstream '%s' returned an unexpected body (%d errors): %s",
                    self._model,
                    exc.error_count(),
                    exc.errors(include_url=False, include_input=False),
                )
                return FALLBACK_UNEXPECTED_RESPONSE

            content = completion.choices[0].message.content
            if not content:
                logger.warning("Upstream '%s' returned empty content", self._model)
                return FALLBACK_EMPTY_RESPONSE

            logger.debug(
                "Upstream '%s' replied with %d chars in %.2fs",
                self._model,
                len(content),
                time.monotonic() - started,
            )
            return content

        except asyncio.TimeoutError:
            logger.warning(
                "Upstream '%s' timed out after %.0fs", self._model, self._timeout_seconds
            )
            return FALLBACK_CONNECTION_FAILED
        except Exception as exc:
            logger.warning(
                "Upstream '%s' call failed after %.2fs: %r",
                self._model,
                time.monotonic() - started,
                exc,
            )
            return FALLBACK_CONNECTION_FAILED
