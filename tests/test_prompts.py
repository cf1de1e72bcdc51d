import pytest

from app.schemas.function import FigFunction, FunctionRequest
from app.services.function.prompts import (
    complexity,
    explain_simple,
    explain_with_language,
    select_prompt,
    translate,
)


def _request(**fields):
    return FunctionRequest(input_language="python", **fields)


def test_single_line_selects_simple_template():
    prompt_request = select_prompt(FigFunction.explain, "print(1)", _request())
    assert prompt_request.name == "explain_simple"
    assert prompt_request.stop == ["\n\n"]
    assert "print(1)" in prompt_request.prompt


def test_any_newline_selects_language_template():
    prompt_request = select_prompt(FigFunction.explain, "a = 1\nb = 2", _request())
    assert prompt_request.name == "explain_with_language"
    assert "python" in prompt_request.prompt


def test_docstring_is_a_log_tag_without_template():
    with pytest.raises(ValueError):
        select_prompt(FigFunction.docstring, "print(1)", _request())


def test_simple_post_format_capitalizes():
    assert explain_simple("x", "python").post_format("  adds two numbers.\n") == (
        "Adds two numbers."
    )


def test_language_post_format_renumbers_steps():
    raw = " Opens the file.\n\n2) Reads every line.\n  3. Closes it.  "
    formatted = explain_with_language("x", "python").post_format(raw)
    assert formatted == "1. Opens the file.\n2. Reads every line.\n3. Closes it."


def test_translate_post_format_strips_fences():
    raw = "```go\nfmt.Println(1)\n```\n"
    assert translate("print(1)", "python", "go").post_format(raw) == "fmt.Println(1)"


def test_translate_post_format_keeps_plain_code():
    assert translate("x", "python", "go").post_format(" x := 1 ") == "x := 1"


def test_complexity_post_format_extracts_big_o():
    assert complexity("x", "python").post_format(" O(n log n), because it sorts.") == (
        "O(n log n)"
    )
    assert complexity("x", "python").post_format(" constant.") == "constant"


def test_language_post_format_keeps_leading_decimals():
    raw = " 3.14 is assigned to pi.\n2. Prints pi."
    formatted = explain_with_language("x", "python").post_format(raw)
    assert formatted == "1. 3.14 is assigned to pi.\n2. Prints pi."
