"""
Chat service orchestrating the chat, summarize and export flows.

Chat flow:
    Validate -> RateLimit -> AppendUser -> {FetchSummary || FetchHistory}
    -> ResolveAttachment (optional) -> AssemblePrompt -> Generate
    -> AppendAssistant -> Respond

The user message is stored before the model is called. If generation
fails afterwards, the stored message stays without a reply; a retry
stores it again. Attachment text reaches the model for the current
exchange only and is never persisted.

Dependencies: chat_backend.core, chat_backend.application.adapters, chat_backend.boundary.llm
System role: Request orchestrator
"""

import asyncio
import logging
import math
from collections.abc import Callable

from chat_backend.application.adapters.attachment_resolver import (
    AttachmentResolver,
    normalize_file_id,
)
from chat_backend.boundary.llm.model_client import ModelClient
from chat_backend.configs.chat import ChatSettings
from chat_backend.core.exceptions import RateLimitedError, ValidationError
from chat_backend.core.rate_limiter import SlidingWindowRateLimiter
from chat_backend.core.session_actor import SessionActorRegistry, now_ms
from chat_backend.models.chat import PromptMessage
from chat_backend.models.session import ChatMessage, SessionExport

logger = logging.getLogger(__name__)

CHAT_FALLBACK = "No response."
SUMMARY_FALLBACK = "No summary."
EMPTY_TRANSCRIPT_PROMPT = "No messages in this session."
ATTACHMENT_HEADER = "[Attached file content]\n"
ATTACHMENT_FOOTER = "\n[End of attached file]\n\n"


def with_attachment(message: str, attachment: str | None) -> str:
    """Prefix the user text with marked attachment content."""
    if attachment is None:
        return message
    return f"{ATTACHMENT_HEADER}{attachment}{ATTACHMENT_FOOTER}{message}"


def build_transcript(messages: list[ChatMessage]) -> str:
    """Render ``role: content`` lines, oldest first."""
    return "\n".join(f"{m.role}: {m.content}" for m in messages)


class ChatService:
    """
    Request orchestrator for conversational chat.

    Coordinates validation, rate limiting, the per-session actor, the
    attachment resolver and the model client.
    """

    def __init__(
        self,
        registry: SessionActorRegistry,
        rate_limiter: SlidingWindowRateLimiter,
        model_client: ModelClient,
        attachment_resolver: AttachmentResolver,
        settings: ChatSettings,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        """
        Initialize chat service.

        Args:
            registry: Session actor registry
            rate_limiter: Process-local sliding window limiter
            model_client: Text generation client
            attachment_resolver: Upload lookup for fileId
            settings: Validation bounds, windows and prompts
            clock: Millisecond clock for timestamps and rate limiting
        """
        self.registry = registry
        self.rate_limiter = rate_limiter
        self.model_client = model_client
        self.attachment_resolver = attachment_resolver
        self.settings = settings
        self._clock = clock

    def validate_session_id(self, raw: str | None) -> str:
        """
        Trim and check the session identity.

        Raises:
            ValidationError: If shorter than the configured minimum
        """
        session_id = raw.strip() if isinstance(raw, str) else ""
        if len(session_id) < self.settings.session_id_min_length:
            raise ValidationError(
                f"sessionId required, min length {self.settings.session_id_min_length}",
                field="sessionId",
            )
        return session_id

    def validate_message(self, raw: str | None) -> str:
        """
        Trim and check the user message length.

        Raises:
            ValidationError: If empty or longer than the configured maximum
        """
        message = raw.strip() if isinstance(raw, str) else ""
        if not 1 <= len(message) <= self.settings.message_max_length:
            raise ValidationError(
                f"message required, length 1..{self.settings.message_max_length}",
                field="message",
                details={"length": len(message)},
            )
        return message

    def check_rate_limit(self, session_id: str) -> None:
        """
        Admit the request or raise.

        Raises:
            RateLimitedError: If the session used up its window
        """
        now = self._clock()
        window_ms = self.settings.rate_limit_window_ms
        if self.rate_limiter.allow(session_id, now, window_ms, self.settings.rate_limit_requests):
            return
        wait_ms = self.rate_limiter.retry_after_ms(session_id, now, window_ms)
        logger.warning(f"{__name__}:check_rate_limit - Rate limited session_id={session_id}")
        raise RateLimitedError(session_id, retry_after_seconds=max(1, math.ceil(wait_ms / 1000)))

    def build_prompt(
        self,
        summary: str | None,
        history: list[ChatMessage],
        current: ChatMessage,
        turn_text: str,
    ) -> list[PromptMessage]:
        """
        Assemble the ordered message list for one chat turn.

        Order: base system prompt, stored summary (if any), history window,
        current user turn. The window is read after the current message was
        appended, so its last entry is normally that message; it is replaced
        by ``turn_text`` rather than sent twice.

        Args:
            summary: Stored session summary
            history: Recent messages, oldest first
            current: The user message persisted for this turn
            turn_text: Text sent to the model for the current turn

        Returns:
            list[PromptMessage]: Prompt for the model
        """
        prompt = [PromptMessage(role="system", content=self.settings.system_prompt)]
        if summary:
            prompt.append(PromptMessage(role="system", content=f"Session summary: {summary}"))

        window = list(history)
        if window and window[-1] == current:
            window.pop()
        prompt.extend(PromptMessage(role=m.role, content=m.content) for m in window)
        prompt.append(PromptMessage(role="user", content=turn_text))
        return prompt

    async def process_chat(
        self,
        session_id: str | None,
        message: str | None,
        file_id: str | None = None,
    ) -> str:
        """
        Run one chat exchange.

        Args:
            session_id: Raw session identity
            message: Raw user message
            file_id: Optional upload identifier

        Returns:
            str: Assistant reply

        Raises:
            ValidationError: Bad input (nothing stored)
            RateLimitedError: Over the request budget (nothing stored)
            StorageUnavailableError: Session or blob storage failure
            ModelUnavailableError: Generation failed (user message stays stored)
        """
        session_id = self.validate_session_id(session_id)
        message = self.validate_message(message)
        file_id = normalize_file_id(file_id)
        self.check_rate_limit(session_id)

        logger.info(
            f"{__name__}:process_chat - START session_id={session_id} "
            f"len={len(message)} attachment={'yes' if file_id else 'no'}"
        )
        actor = self.registry.get(session_id)

        current = await actor.append_message("user", message, self._clock())

        summary, history = await asyncio.gather(
            actor.get_summary(),
            actor.get_recent_messages(self.settings.history_limit),
        )

        attachment = None
        if file_id:
            attachment = await self.attachment_resolver.resolve(file_id)

        prompt = self.build_prompt(summary, history, current, with_attachment(message, attachment))
        reply = await self.model_client.generate(prompt, fallback=CHAT_FALLBACK)

        await actor.append_message("assistant", reply, self._clock())
        logger.info(f"{__name__}:process_chat - END session_id={session_id} reply_len={len(reply)}")
        return reply

    async def summarize(self, session_id: str | None) -> str:
        """
        Summarize recent history and store it as the session summary.

        Args:
            session_id: Raw session identity

        Returns:
            str: New summary

        Raises:
            ValidationError: Bad session identity
            RateLimitedError: Over the request budget
            StorageUnavailableError: Session storage failure
            ModelUnavailableError: Generation failed (summary unchanged)
        """
        session_id = self.validate_session_id(session_id)
        self.check_rate_limit(session_id)

        actor = self.registry.get(session_id)
        recent = await actor.get_recent_messages(self.settings.summarize_limit)

        transcript = build_transcript(recent)
        if transcript:
            prompt_text = f"{self.settings.summarize_prompt}\n\nConversation:\n{transcript}"
        else:
            prompt_text = EMPTY_TRANSCRIPT_PROMPT

        summary = await self.model_client.generate(
            [PromptMessage(role="user", content=prompt_text)],
            fallback=SUMMARY_FALLBACK,
        )
        await actor.set_summary(summary)
        logger.info(
            f"{__name__}:summarize - Stored summary session_id={session_id} "
            f"messages={len(recent)} summary_len={len(summary)}"
        )
        return summary

    async def export(self, session_id: str | None) -> SessionExport:
        """
        Return the full session record.

        Rate limiting applies only when ``rate_limit_export`` is enabled.

        Args:
            session_id: Raw session identity

        Returns:
            SessionExport: Metadata and every message

        Raises:
            ValidationError: Bad session identity
            RateLimitedError: Over the request budget (if enabled)
            StorageUnavailableError: Session storage failure
        """
        session_id = self.validate_session_id(session_id)
        if self.settings.rate_limit_export:
            self.check_rate_limit(session_id)

        return await self.registry.get(session_id).export_session()
