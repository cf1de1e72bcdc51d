import logging
from typing import Optional

from app.schemas.function import FigFunction
from app.utils.posthog_client import get_posthog_client


EVENT_NAMES = {
    FigFunction.explain: "Explain Function",
    FigFunction.ask: "Ask Function",
    FigFunction.complexity: "Complexity Function",
    FigFunction.translate: "Translate Function",
}


def track_function_event(
    user_id: str,
    fig_function: FigFunction,
    source: Optional[str],
    input_language: Optional[str],
    output_language: Optional[str],
) -> None:
    """Captures the product analytics event for a completed fig function."""
    posthog_client = get_posthog_client()
    if not posthog_client:
        logging.info(
            f"Posthog disabled, skipping '{EVENT_NAMES[fig_function]}' for user {user_id}"
        )
        return

    posthog_client.capture(
        distinct_id=user_id,
        event=EVENT_NAMES[fig_function],
        properties={
            "source": source,
            "inputLanguage": input_language,
            "outputLanguage": output_language,
        },
    )
