"""Commit message generation through a chat-completion endpoint."""
import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from ..config import Config
from ..exceptions import ConfigurationError, ExternalServiceError
from ..models import ChangeSet, ChatMessage, CompletionRequest, CompletionResponse
from ..prompts import SYSTEM_PROMPT
from .builder import build_prompt

logger = logging.getLogger(__name__)

TEMPERATURE = 0.7
MAX_TOKENS = 500

SERVICE_ERROR_HINT = (
    "Failed to call the completion API, please check your API key and network connection"
)


class CommitMessageGenerator:
    """Generates commit messages for a ChangeSet.

    The configuration is passed in explicitly; ``transport`` lets callers
    swap the HTTP transport (tests use ``httpx.MockTransport``).
    """

    def __init__(self, config: Config, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self.transport = transport

    async def generate(self, changes: ChangeSet) -> str:
        """Generate a commit message for ``changes``."""
        return await self.complete(build_prompt(changes))

    async def complete(self, prompt: str) -> str:
        """Send ``prompt`` to the completion endpoint and return the trimmed reply.

        Raises:
            ConfigurationError: No API key is configured. Nothing is sent.
            ExternalServiceError: The request failed or the reply did not
                have the expected shape.
        """
        api_key = self.config.api_key
        if not api_key:
            raise ConfigurationError(
                "API key not set. Run: git-copilot --config api_key YOUR_API_KEY"
            )

        payload = CompletionRequest(
            model=self.config.model,
            messages=[
                ChatMessage(role="system", content=SYSTEM_PROMPT),
                ChatMessage(role="user", content=prompt),
            ],
            temperature=TEMPERATURE,
            max_tokens=MAX_TOKENS,
        )
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {api_key}",
        }

        logger.debug("Requesting commit message from %s (model %s)", self.config.api_url, self.config.model)
        try:
            async with httpx.AsyncClient(transport=self.transport) as client:
                response = await client.post(
                    self.config.api_url,
                    json=payload.model_dump(),
                    headers=headers,
                    timeout=self.config.request_timeout,
                )
                response.raise_for_status()
                result = CompletionResponse.model_validate(response.json())
        except httpx.HTTPStatusError as e:
            logger.error(
                "Completion API returned %s: %s", e.response.status_code, e.response.text
            )
            raise ExternalServiceError(SERVICE_ERROR_HINT) from e
        except httpx.HTTPError as e:
            logger.error("Error calling completion API: %s", e)
            raise ExternalServiceError(SERVICE_ERROR_HINT) from e
        except (ValueError, ValidationError) as e:
            logger.error("Unexpected completion API response: %s", e)
            raise ExternalServiceError(SERVICE_ERROR_HINT) from e

        return result.content.strip()
