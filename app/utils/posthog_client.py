"""Posthog client utility for product analytics and OpenAI LLM analytics."""

from __future__ import annotations

import logging
from typing import Optional, TYPE_CHECKING, Any

from app.utils.config import Settings

if TYPE_CHECKING:
    from posthog import Posthog

# Initialize settings
settings = Settings()

# Global Posthog client instance
_posthog_client: Optional[Posthog] = None


def get_posthog_client() -> Optional[Posthog]:
    """Get or initialize the Posthog client."""
    global _posthog_client

    if _posthog_client is None:
        # Only enable PostHog in staging and production
        if settings.app_env not in ["staging", "prod", "production"]:
            return None

        if not settings.posthog_api_key:
            logging.warning(
                "Posthog API key not configured. Posthog logging will be disabled."
            )
            return None

        try:
            from posthog import Posthog

            _posthog_client = Posthog(
                project_api_key=settings.posthog_api_key,
                host=settings.posthog_api_url,
            )
        except Exception as e:
            logging.error(f"Failed to initialize Posthog client: {e}")
            return None

    return _posthog_client


def get_openai_client(api_key: str, base_url: str | None = None) -> Any:
    """
    Get an OpenAI client. Wraps with Posthog for automatic LLM analytics if enabled.

    Args:
        api_key: OpenAI API key
        base_url: Optional base URL. If not provided, uses OpenAI base URL from settings.

    Returns:
        AsyncOpenAI client (possibly with Posthog integration)
    """
    posthog_client = get_posthog_client()

    if base_url is None:
        base_url = settings.openai_api_base_url

    if not posthog_client:
        from openai import AsyncOpenAI

        return AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
        )

    from posthog.ai.openai import AsyncOpenAI

    return AsyncOpenAI(
        api_key=api_key,
        base_url=base_url,
        posthog_client=posthog_client,
    )


def get_posthog_kwargs(
    user_id: str, trace_id: str, properties: dict[str, Any]
) -> dict[str, Any]:
    """
    Get Posthog-specific keyword arguments for OpenAI client calls.
    Returns an empty dict if Posthog is disabled.
    """
    posthog_client = get_posthog_client()
    if not posthog_client:
        return {}

    return {
        "posthog_distinct_id": user_id,
        "posthog_trace_id": trace_id,
        "posthog_properties": properties,
    }


def shutdown_posthog() -> None:
    """Shutdown the Posthog client."""
    global _posthog_client
    if _posthog_client:
        try:
            _posthog_client.shutdown()
        except Exception as e:
            logging.error(f"Error shutting down Posthog client: {e}")
        finally:
            _posthog_client = None
