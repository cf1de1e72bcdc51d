"""Utility functions for working with OpenAI SDK chat completion responses."""


def extract_text_from_response(response) -> str:
    """
    Extract text content from an OpenAI Chat Completions API response.

    The Chat Completions API structure is:
    {
        "choices": [{
            "message": {
                "content": "..."
            }
        }]
    }

    Older completion-style payloads carry the text on the choice itself
    (``choices[0].text``); that shape is accepted as well.

    Args:
        response: The response object from OpenAI SDK chat.completions.create()

    Returns:
        The extracted text string, or empty string if not found
    """
    if not hasattr(response, "choices") or not response.choices:
        return ""

    choice = response.choices[0]
    message = getattr(choice, "message", None)
    content = getattr(message, "content", None) if message is not None else None
    if content:
        return content

    text = getattr(choice, "text", None)
    return text or ""
