import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app.schemas.common import ErrorResponse
from app.schemas.function import FigFunction, FunctionRequest, FunctionResponse
from app.services.function.orchestrator import process_function_request
from app.utils.config import CompletionConfig, get_completion_config
from app.utils.errors import (
    FigError,
    IdentityResolutionError,
    InvalidInputError,
    QuotaExceededError,
)

router = APIRouter(
    prefix="/v1",
    tags=["function"],
)


def bad_request() -> JSONResponse:
    """The single failure response. The reason is never sent to the client."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ErrorResponse().model_dump(by_alias=True),
    )


async def _handle(
    fig_function: FigFunction, request: FunctionRequest, config: CompletionConfig
):
    try:
        return await process_function_request(fig_function, request, config)
    except (InvalidInputError, IdentityResolutionError, QuotaExceededError) as e:
        logging.warning(f"{fig_function.value} rejected ({type(e).__name__}): {e}")
        return bad_request()
    except FigError as e:
        logging.error(f"{fig_function.value} failed ({type(e).__name__}): {e}")
        return bad_request()
    except Exception as e:
        logging.error(
            f"{fig_function.value} failed unexpectedly: {type(e).__name__}: {e}",
            exc_info=True,
        )
        return bad_request()


@router.post(
    "/explain", response_model=FunctionResponse, response_model_exclude_none=True
)
async def explain_endpoint(
    request: FunctionRequest,
    config: CompletionConfig = Depends(get_completion_config),
):
    """Explains a snippet of code in plain English."""
    return await _handle(FigFunction.explain, request, config)


@router.post(
    "/translate", response_model=FunctionResponse, response_model_exclude_none=True
)
async def translate_endpoint(
    request: FunctionRequest,
    config: CompletionConfig = Depends(get_completion_config),
):
    """Translates code from inputLanguage into outputLanguage."""
    return await _handle(FigFunction.translate, request, config)


@router.post(
    "/complexity", response_model=FunctionResponse, response_model_exclude_none=True
)
async def complexity_endpoint(
    request: FunctionRequest,
    config: CompletionConfig = Depends(get_completion_config),
):
    """Estimates the Big O time complexity of code."""
    return await _handle(FigFunction.complexity, request, config)


@router.post(
    "/ask", response_model=FunctionResponse, response_model_exclude_none=True
)
async def ask_endpoint(
    request: FunctionRequest,
    config: CompletionConfig = Depends(get_completion_config),
):
    """Answers a free-form question about code."""
    return await _handle(FigFunction.ask, request, config)
