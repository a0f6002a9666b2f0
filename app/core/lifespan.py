"""Application lifespan: startup and shutdown.

Only infrastructure wiring lives here (document store, change feed, cache,
telemetry). Everything built at startup is parked on app.state and handed to
routes by the dependency composition root.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.application.interfaces.store import IDocumentStore
from app.application.services.action_dispatcher import ActionDispatcher
from app.application.use_cases.automation import RuleEngine
from app.core.config import Settings, get_settings
from app.infrastructure.messaging import InProcessChangeFeed
from app.infrastructure.repositories import RuleRepository
from app.infrastructure.services import JinjaMessageRenderer, LogOnlyEmailSender
from app.shared.telemetry.logging import get_logger, setup_logging

logger = get_logger(__name__)


async def _create_store(settings: Settings, change_feed: InProcessChangeFeed) -> IDocumentStore:
    if settings.database_backend == "memory":
        from app.infrastructure.memory import InMemoryDocumentStore

        logger.warning("Using in-memory document store; data is lost on restart")
        return InMemoryDocumentStore(
            change_feed=change_feed if settings.memory_store_emit_changes else None
        )

    from app.infrastructure.firebase import (
        FirestoreDocumentStore,
        get_firestore_client,
        init_firebase,
    )

    if not init_firebase():
        raise RuntimeError(
            "Firestore could not be initialized. Check FIREBASE_SERVICE_ACCOUNT_KEY "
            "or FIREBASE_SERVICE_ACCOUNT_PATH."
        )
    client = get_firestore_client()
    assert client is not None
    return FirestoreDocumentStore(client)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: logging, Redis cache (if enabled), document store, rule
    engine subscription on the change feed, telemetry (if enabled).
    Shutdown order: cache disconnect, Firestore client close, telemetry.
    """
    settings = get_settings()
    setup_logging()

    # ---- Startup ----
    app.state.email_sender = LogOnlyEmailSender()
    app.state.message_renderer = JinjaMessageRenderer()
    app.state.change_feed = InProcessChangeFeed()
    app.state.cache = None
    app.state.event_deduplicator = None

    if settings.redis_enabled:
        from app.infrastructure.cache import CacheService, RedisEventDeduplicator

        cache = CacheService()
        await cache.connect()
        app.state.cache = cache
        if settings.rule_event_dedup_enabled:
            app.state.event_deduplicator = RedisEventDeduplicator(
                cache, settings.rule_event_dedup_ttl_seconds
            )
    elif settings.rule_event_dedup_enabled:
        logger.warning("rule_event_dedup_enabled requires Redis; redelivered events will re-fire rules")

    store = await _create_store(settings, app.state.change_feed)
    app.state.store = store

    rule_engine = RuleEngine(
        store,
        RuleRepository(store),
        ActionDispatcher(store, app.state.email_sender, app.state.message_renderer),
        deduplicator=app.state.event_deduplicator,
    )
    app.state.change_feed.subscribe(rule_engine.on_document_change)

    if settings.telemetry_enabled:
        from app.shared.telemetry.telemetry import TelemetryConfig, set_telemetry

        telemetry = TelemetryConfig(
            service_name=settings.app_name,
            service_version=settings.app_version,
            enabled=True,
            environment=settings.telemetry_environment,
        )
        telemetry.setup_telemetry(
            exporter_type=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )
        set_telemetry(telemetry)
        telemetry.instrument_fastapi(app)
        telemetry.instrument_logging()
        if settings.redis_enabled:
            telemetry.instrument_redis()
        logger.info("Telemetry initialized")

    logger.info(
        "%s %s started (store=%s)", settings.app_name, settings.app_version, settings.database_backend
    )

    yield

    # ---- Shutdown ----
    if app.state.cache is not None:
        await app.state.cache.disconnect()
        app.state.cache = None
        logger.info("Cache disconnected")

    if settings.database_backend == "firestore":
        from app.infrastructure.firebase import close_firebase

        await close_firebase()
        logger.info("Firestore client closed")

    from app.shared.telemetry.telemetry import get_telemetry, set_telemetry

    telemetry_instance = get_telemetry()
    if telemetry_instance is not None:
        telemetry_instance.shutdown()
        set_telemetry(None)
        logger.info("Telemetry shutdown complete")
