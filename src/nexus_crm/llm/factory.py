"""Relationship-intelligence service factory.

Creates the appropriate RelationshipIntelligence based on application settings.
"""

from typing import Optional

import structlog

from ..config.settings import Settings
from ..exceptions import ConfigurationError
from .chat_pool import ChatProviderPool
from .intelligence import IntelligenceService
from .interface import RelationshipIntelligence

logger = structlog.get_logger()


def create_intelligence_service(
    settings: Settings,
    chat_pool: Optional[ChatProviderPool] = None,
) -> RelationshipIntelligence:
    """Create a relationship-intelligence service based on settings.

    Args:
        settings: Application settings. ``intelligence_provider`` selects
            the backend; supported values: "openai_compatible", "disabled".
        chat_pool: Optional pre-built provider pool.

    Returns:
        A RelationshipIntelligence implementation. Without a credential for
        the configured model the service answers with fallbacks only.

    Raises:
        ConfigurationError: If the provider name is unknown.
    """
    provider_name = settings.intelligence_provider

    if provider_name == "disabled":
        return IntelligenceService(
            chat_provider=None,
            search_provider=None,
            follow_up_days=settings.default_follow_up_days,
        )

    if provider_name == "openai_compatible":
        pool = chat_pool or ChatProviderPool(settings)
        provider = pool.get_intelligence_provider()
        search_provider = pool.get_search_provider()
        if provider is None or search_provider is None:
            logger.info(
                "Relationship intelligence running on fallbacks",
                model=settings.model_intelligence if provider is None else None,
                search_model=settings.model_search if search_provider is None else None,
                available_vendors=pool.available_vendors(),
            )
        return IntelligenceService(
            chat_provider=provider,
            search_provider=search_provider,
            follow_up_days=settings.default_follow_up_days,
        )

    raise ConfigurationError(
        f"Unknown intelligence provider: '{provider_name}'. "
        f"Supported providers: 'openai_compatible', 'disabled'"
    )
