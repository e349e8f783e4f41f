"""OpenAI-compatible chat-completions adapter implementing the LLMService port.

Works against OpenAI itself or any provider exposing the same API shape
(Groq, local gateways) through `base_url`.
"""
from __future__ import annotations

import asyncio
import logging
import time
from typing import Dict, List, Optional

import httpx
from openai import AsyncOpenAI, OpenAIError

from pharmis_backend.domain.insight.errors import CompletionServiceError
from pharmis_backend.domain.ports.llm import LLMService

logger = logging.getLogger(__name__)


class OpenAILLM(LLMService):
    _DEFAULT_TIMEOUT_S = 20.0

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: Optional[str] = None,
        timeout_s: float = _DEFAULT_TIMEOUT_S,
    ) -> None:
        self._model = model
        self._timeout_s = timeout_s
        # retries are disabled so the timeout bounds the whole call; an empty
        # key is replaced so construction succeeds and requests fail with 401
        self._client = AsyncOpenAI(
            api_key=api_key or "missing",
            base_url=base_url,
            timeout=timeout_s,
            max_retries=0,
        )

    @property
    def model(self) -> str:
        return self._model

    async def generate_response(
        self,
        messages: List[Dict[str, str]],
        temperature: float = 0.7,
        max_tokens: int = 500,
    ) -> str:
        start_time = time.time()
        try:
            response = await asyncio.wait_for(
                self._client.chat.completions.create(
                    model=self._model,
                    messages=messages,
                    temperature=temperature,
                    max_tokens=max_tokens,
                ),
                timeout=self._timeout_s,
            )
        except asyncio.TimeoutError as e:
            raise CompletionServiceError(
                f"Completion timed out after {self._timeout_s:.0f}s"
            ) from e
        except (OpenAIError, httpx.HTTPError) as e:
            raise CompletionServiceError(f"Completion request failed: {e}") from e

        choices = getattr(response, "choices", None) or []
        message = getattr(choices[0], "message", None) if choices else None
        content = getattr(message, "content", None) if message else None
        if not isinstance(content, str) or not content.strip():
            raise CompletionServiceError("Completion response has no message content")

        logger.info(
            f"Completion from {self._model}: {len(content)} chars in {time.time() - start_time:.2f}s"
        )
        return content.strip()
