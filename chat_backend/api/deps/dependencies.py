"""
Dependency injection container.

Factory functions for FastAPI dependencies. Long-lived collaborators
(engine, actor registry, rate limiter, S3 and model clients) are created
lazily once per process and shared by every request.

Dependencies: chat_backend.configs, chat_backend.application, chat_backend.boundary
System role: DI container for service injection
"""

from chat_backend.configs import Settings, get_settings


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings
        self._engine = None
        self._registry = None
        self._rate_limiter = None
        self._s3_client = None
        self._model_client = None
        self._attachment_resolver = None

    @property
    def settings(self) -> Settings:
        """Get settings (process-wide by default)."""
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def engine(self):
        """Get cached async database engine."""
        if self._engine is None:
            from chat_backend.boundary.db.connection import get_async_engine

            self._engine = get_async_engine(self.settings.database.url)
        return self._engine

    @property
    def registry(self):
        """Get cached session actor registry."""
        if self._registry is None:
            from chat_backend.boundary.db.connection import (
                SchemaInitializer,
                get_async_session_factory,
            )
            from chat_backend.core.session_actor import SessionActorRegistry

            self._registry = SessionActorRegistry(
                get_async_session_factory(self.engine),
                SchemaInitializer(self.engine),
            )
        return self._registry

    @property
    def rate_limiter(self):
        """Get cached process-local rate limiter."""
        if self._rate_limiter is None:
            from chat_backend.core.rate_limiter import SlidingWindowRateLimiter

            self._rate_limiter = SlidingWindowRateLimiter()
        return self._rate_limiter

    @property
    def s3_client(self):
        """Get cached S3 uploads client."""
        if self._s3_client is None:
            from chat_backend.boundary.aws.s3_client import S3UploadClient

            s3_settings = self.settings.s3_uploads
            self._s3_client = S3UploadClient(
                bucket=s3_settings.bucket,
                region=s3_settings.region,
                key_prefix=s3_settings.key_prefix,
            )
        return self._s3_client

    @property
    def model_client(self):
        """Get cached model client."""
        if self._model_client is None:
            from chat_backend.boundary.llm.model_client import ModelClient

            self._model_client = ModelClient.from_settings(self.settings.model)
        return self._model_client

    @property
    def attachment_resolver(self):
        """Get cached attachment resolver."""
        if self._attachment_resolver is None:
            from chat_backend.application.adapters.attachment_resolver import AttachmentResolver

            self._attachment_resolver = AttachmentResolver(
                self.s3_client,
                max_bytes=self.settings.s3_uploads.attachment_max_bytes,
            )
        return self._attachment_resolver

    async def aclose(self) -> None:
        """Dispose the engine and drop all cached instances."""
        if self._engine is not None:
            await self._engine.dispose()
        self.__init__(self._settings)


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_chat_service():
    """
    Get chat service (request orchestrator) instance.

    Returns:
        ChatService: Orchestrator wired to the shared registry, limiter and clients
    """
    from chat_backend.application.services.chat_service import ChatService

    cache = get_service_cache()
    return ChatService(
        registry=cache.registry,
        rate_limiter=cache.rate_limiter,
        model_client=cache.model_client,
        attachment_resolver=cache.attachment_resolver,
        settings=cache.settings.chat,
    )


def get_upload_service():
    """
    Get upload service instance.

    Returns:
        UploadService: Service storing attachments in the uploads bucket
    """
    from chat_backend.application.services.upload_service import UploadService

    cache = get_service_cache()
    return UploadService(cache.s3_client, max_upload_bytes=cache.settings.s3_uploads.max_upload_bytes)


def get_attachment_resolver():
    """
    Get attachment resolver instance.

    Returns:
        AttachmentResolver: Shared resolver for the uploads bucket
    """
    return get_service_cache().attachment_resolver
