import logging
import time

from app.services.function.prompts import PromptRequest
from app.utils.config import CompletionConfig, Settings
from app.utils.errors import UpstreamError
from app.utils.llm_utils import extract_text_from_response
from app.utils.posthog_client import get_openai_client, get_posthog_kwargs


# Initialize settings
settings = Settings()


def _is_authentication_error(error: Exception) -> bool:
    """Checks if the error is related to authentication/invalid API key."""
    error_str = str(error).lower()
    auth_indicators = ["authentication", "unauthorized", "invalid api key", "401"]
    return any(indicator in error_str for indicator in auth_indicators)


async def generate_completion(
    prompt_request: PromptRequest,
    config: CompletionConfig,
    user_id: str,
    trace_id: str,
) -> str:
    """
    Sends one chat completion for a prompt template and returns the raw text
    of the first choice.

    Args:
        prompt_request: The selected prompt template.
        config: Model, temperature and token budget for the call.
        user_id: Distinct id used for LLM analytics.
        trace_id: The log record id, used to group LLM analytics.

    Returns:
        The unformatted completion text.

    Raises:
        UpstreamError: If the API key is missing, the call fails, or no text comes back.
    """
    if not settings.openai_api_key:
        logging.error("OpenAI API key not configured")
        raise UpstreamError("OpenAI API key not configured")

    client = get_openai_client(settings.openai_api_key, base_url=config.base_url)
    messages = [{"role": "user", "content": prompt_request.prompt}]

    try:
        start_time = time.time()
        response = await client.chat.completions.create(
            model=config.model,
            messages=messages,
            temperature=config.temperature,
            max_tokens=config.max_tokens,
            stop=prompt_request.stop,
            **get_posthog_kwargs(
                user_id, trace_id, {"prompt_template": prompt_request.name}
            ),
        )
        latency = time.time() - start_time
    except Exception as e:
        if _is_authentication_error(e):
            logging.error(f"OpenAI authentication error (invalid API key): {e}")
        else:
            logging.error(f"An unexpected error occurred while calling OpenAI: {e}")
        raise UpstreamError(f"Completion request failed: {e}") from e

    text = extract_text_from_response(response)
    if not text.strip():
        raise UpstreamError("Completion returned no text")

    logging.info(
        f"Completion for template={prompt_request.name} finished in {latency:.2f}s"
    )
    return text
