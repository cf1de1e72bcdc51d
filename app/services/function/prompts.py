import re
from typing import Callable, List, Optional

from pydantic import BaseModel, ConfigDict

from app.schemas.function import FigFunction, FunctionRequest
from app.services.function.validation import JS_WHITESPACE


class PromptRequest(BaseModel):
    """Prompt text, stop sequences and output formatter for one completion."""

    model_config = ConfigDict(frozen=True)

    name: str
    prompt: str
    stop: Optional[List[str]] = None
    post_format: Callable[[str], str]


_CODE_FENCE = re.compile(r"^```[\w+#-]*\s*\n?|\n?```\s*$")
_NUMBERED_LINE = re.compile(r"^\d+[.)]\s+")


def _capitalize_first(text: str) -> str:
    text = text.strip()
    return text[:1].upper() + text[1:]


def _format_numbered_list(text: str) -> str:
    """Renumber the non-empty lines of a step list as 1., 2., 3. ..."""
    lines = [line.strip() for line in text.strip().split("\n") if line.strip()]
    steps = [_NUMBERED_LINE.sub("", line) for line in lines]
    return "\n".join(f"{i}. {_capitalize_first(step)}" for i, step in enumerate(steps, 1))


def _strip_code_fence(text: str) -> str:
    return _CODE_FENCE.sub("", text.strip()).strip()


def _format_complexity(text: str) -> str:
    text = text.strip().rstrip(".").strip()
    match = re.search(r"O\(.*\)", text)
    return match.group(0) if match else text


def explain_simple(code: str, language: str) -> PromptRequest:
    return PromptRequest(
        name="explain_simple",
        prompt=(
            f"{language} code:\n{code}\n\n"
            "Explain in one or two plain English sentences what the code above does:\n"
        ),
        stop=["\n\n"],
        post_format=_capitalize_first,
    )


def explain_with_language(code: str, language: str) -> PromptRequest:
    return PromptRequest(
        name="explain_with_language",
        prompt=(
            f"Here is a snippet of {language} code:\n\n{code}\n\n"
            f"Explain what this {language} code is doing as a numbered list of steps, "
            "one step per line:\n1."
        ),
        stop=["\n\n\n"],
        post_format=_format_numbered_list,
    )


def translate(code: str, input_language: str, output_language: str) -> PromptRequest:
    return PromptRequest(
        name="translate",
        prompt=(
            f"Translate the following code from {input_language} into {output_language}. "
            "Reply with the translated code only.\n\n"
            f"### {input_language}\n{code}\n\n### {output_language}\n"
        ),
        stop=["###"],
        post_format=_strip_code_fence,
    )


def complexity(code: str, language: str) -> PromptRequest:
    return PromptRequest(
        name="complexity",
        prompt=(
            f"{language} code:\n{code}\n\n"
            "The time complexity of the code above in Big O notation is"
        ),
        stop=["\n"],
        post_format=_format_complexity,
    )


def ask(code: str, language: str, question: str) -> PromptRequest:
    return PromptRequest(
        name="ask",
        prompt=(
            f"{language} code:\n{code}\n\n"
            f"Question about the code above: {question}\nAnswer:"
        ),
        stop=["\n\n\n"],
        post_format=_capitalize_first,
    )


def is_multiline(code: str) -> bool:
    return len(code.split("\n")) > 1


def select_prompt(
    fig_function: FigFunction, code: str, request: FunctionRequest
) -> PromptRequest:
    """Pick the template for a fig function. `code` must already be trimmed."""
    language = request.input_language
    if fig_function == FigFunction.explain:
        if is_multiline(code):
            return explain_with_language(code, language)
        return explain_simple(code, language)
    if fig_function == FigFunction.translate:
        return translate(code, language, request.output_language)
    if fig_function == FigFunction.complexity:
        return complexity(code, language)
    if fig_function == FigFunction.ask:
        return ask(code, language, request.question.strip(JS_WHITESPACE))
    raise ValueError(f"No prompt template for fig function '{fig_function.value}'")
