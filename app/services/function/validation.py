from typing import Optional

from app.schemas.function import FigFunction, FunctionRequest
from app.utils.config import CompletionConfig
from app.utils.errors import InvalidInputError

# Characters removed by JavaScript String.prototype.trim()
JS_WHITESPACE = (
    "\t\n\v\f\r \u00a0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000\ufeff"
)


def utf16_length(value: str) -> int:
    """Length in UTF-16 code units, the way browser clients count characters."""
    return len(value.encode("utf-16-le")) // 2


def _require(value: Optional[str], error_on_empty: str) -> None:
    if value is None or value == "":
        raise InvalidInputError(error_on_empty)


def validate_request(
    fig_function: FigFunction, request: FunctionRequest, config: CompletionConfig
) -> str:
    """
    Check the request fields for a fig function and return the trimmed code.

    The length limit applies to the code as submitted, before trimming.

    Raises:
        InvalidInputError: If a required field is empty or the code is too long.
    """
    code = request.code if request.code is not None else ""
    code_trimmed = code.strip(JS_WHITESPACE)

    _require(code_trimmed, "No code entered")
    _require(request.input_language, "No programming language selected")
    if fig_function == FigFunction.translate:
        _require(request.output_language, "No output language selected")
    if fig_function == FigFunction.ask:
        _require((request.question or "").strip(JS_WHITESPACE), "No question entered")

    if utf16_length(code) > config.max_code_length:
        raise InvalidInputError(
            f"Input cannot exceed over {config.max_code_length} characters"
        )

    return code_trimmed
