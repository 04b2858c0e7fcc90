"""
OpenAI-backed response backend.

Each advisor answers with one chat completion: the system prompt carries
the advisor's role and project context, the user prompt carries the query.
"""

import logging
import time
from typing import Any, Dict, Optional

from openai import OpenAI

from conductor.backends.base import ResponseBackend
from conductor.backends.prompts import build_system_prompt, build_user_prompt
from conductor.backends.response_parser import ParseError, parse_advisor_response
from conductor.orchestration.errors import BackendResponseError
from conductor.shared.contracts import AdvisorResponseV1
from conductor.shared.llm import DEFAULT_MODEL, get_cached_client, get_llm_response_with_usage


logger = logging.getLogger(__name__)


class LLMResponseBackend(ResponseBackend):
    """
    Response backend that asks an OpenAI chat model.

    Args:
        client: OpenAI client; the cached module client is used when omitted
        model: Model identifier
        timeout: Per-request timeout in seconds
    """

    name = "openai"

    def __init__(
        self,
        client: Optional[OpenAI] = None,
        model: str = DEFAULT_MODEL,
        timeout: Optional[float] = None,
    ):
        self._client = client
        self.model = model
        self.timeout = timeout

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            self._client = get_cached_client()
        return self._client

    def respond(self, context: Dict[str, Any], query: str) -> AdvisorResponseV1:
        advisor_name = (context.get("advisor") or {}).get("name", "unknown")
        system_prompt = build_system_prompt(context)
        user_prompt = build_user_prompt(query)

        start_time = time.time()
        try:
            raw_response, usage = get_llm_response_with_usage(
                client=self.client,
                user_prompt=user_prompt,
                system_prompt=system_prompt,
                model=self.model,
                timeout=self.timeout,
            )
        except Exception as e:
            logger.error(f"[advisor={advisor_name}] [llm] Call failed: {e}")
            raise BackendResponseError(advisor_name, str(e)) from e

        duration_ms = int((time.time() - start_time) * 1000)
        logger.info(
            f"[advisor={advisor_name}] [llm] Response received | "
            f"duration_ms={duration_ms}, tokens={usage.get('total_tokens')}"
        )

        try:
            return parse_advisor_response(raw_response)
        except ParseError as e:
            logger.error(f"[advisor={advisor_name}] [llm] Unparseable response: {e}")
            raise BackendResponseError(advisor_name, str(e)) from e
