"""
Model client for text generation.

Thin wrapper over a LangChain chat model: converts role/content pairs to
LangChain messages, bounds the call with a timeout and maps every failure
to ModelUnavailableError. Output without usable text is replaced by a
caller-provided fallback instead of failing the exchange.

Dependencies: langchain_core, langchain_aws, langchain_google_genai (optional)
System role: External text-generation boundary
"""

import asyncio
import logging
from typing import Any

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from chat_backend.configs.model import ModelSettings
from chat_backend.core.exceptions import ModelUnavailableError
from chat_backend.models.chat import PromptMessage

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK = "No response."

_MESSAGE_TYPES: dict[str, type[BaseMessage]] = {
    "system": SystemMessage,
    "user": HumanMessage,
    "assistant": AIMessage,
}


def build_chat_model(settings: ModelSettings) -> BaseChatModel:
    """
    Create the configured LangChain chat model.

    Args:
        settings: Model settings (provider, model id, sampling)

    Returns:
        BaseChatModel: Chat model ready for ainvoke
    """
    if settings.provider == "google_genai":
        from langchain_google_genai import ChatGoogleGenerativeAI

        return ChatGoogleGenerativeAI(
            model=settings.model_id,
            temperature=settings.temperature,
            max_output_tokens=settings.max_tokens,
        )

    from langchain_aws import ChatBedrockConverse

    return ChatBedrockConverse(
        model=settings.model_id,
        region_name=settings.region,
        temperature=settings.temperature,
        max_tokens=settings.max_tokens,
    )


def to_langchain_messages(messages: list[PromptMessage]) -> list[BaseMessage]:
    """Convert role/content pairs to LangChain message objects."""
    return [_MESSAGE_TYPES[m.role](content=m.content) for m in messages]


def extract_text(response: Any) -> str | None:
    """
    Pull generated text out of a chat model response.

    Plain string content is returned as-is; content-block lists are joined
    from their text blocks.

    Returns:
        str | None: Text, or None when the response has no usable text
    """
    content = getattr(response, "content", None)
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and isinstance(block.get("text"), str):
                parts.append(block["text"])
        if parts:
            return "".join(parts)
    return None


class ModelClient:
    """Generates text from an ordered list of role/content pairs."""

    def __init__(self, chat_model: BaseChatModel, timeout_seconds: float = 60.0) -> None:
        """
        Initialize model client.

        Args:
            chat_model: LangChain chat model
            timeout_seconds: Upper bound for one generation call
        """
        self._chat_model = chat_model
        self._timeout_seconds = timeout_seconds

    @classmethod
    def from_settings(cls, settings: ModelSettings) -> "ModelClient":
        """Build a client for the configured provider."""
        return cls(build_chat_model(settings), timeout_seconds=settings.timeout_seconds)

    async def generate(self, messages: list[PromptMessage], fallback: str = DEFAULT_FALLBACK) -> str:
        """
        Run one generation.

        Args:
            messages: Ordered role/content pairs
            fallback: Text returned when the model output has no usable text

        Returns:
            str: Generated text or ``fallback``

        Raises:
            ModelUnavailableError: On transport/inference failure or timeout
        """
        lc_messages = to_langchain_messages(messages)
        try:
            response = await asyncio.wait_for(
                self._chat_model.ainvoke(lc_messages),
                timeout=self._timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            logger.error(f"{__name__}:generate - Timed out after {self._timeout_seconds}s")
            raise ModelUnavailableError(
                "Model request timed out",
                {"timeout_seconds": self._timeout_seconds},
            ) from e
        except Exception as e:
            logger.error(f"{__name__}:generate - Model call failed: {type(e).__name__}: {e}")
            raise ModelUnavailableError(
                f"Model request failed ({type(e).__name__})",
                {"error_type": type(e).__name__},
            ) from e

        text = extract_text(response)
        if text is None:
            logger.warning(f"{__name__}:generate - Response had no text content, using fallback")
            return fallback
        return text
