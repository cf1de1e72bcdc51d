import logging
import uuid

from app.schemas.function import (
    FigFunction,
    FunctionRequest,
    FunctionResponse,
    LogRecord,
)
from app.services.function.db_utils import save_log_record
from app.services.function.llm_utils import generate_completion
from app.services.function.posthog_utils import track_function_event
from app.services.function.prompts import select_prompt
from app.services.function.validation import validate_request
from app.services.user.identity import credential_from_request, resolve_identity
from app.services.user.quota import does_exceed_quota
from app.utils.config import CompletionConfig
from app.utils.db_utils import open_connection
from app.utils.errors import QuotaExceededError


async def process_function_request(
    fig_function: FigFunction,
    request: FunctionRequest,
    config: CompletionConfig,
) -> FunctionResponse:
    """
    Runs one fig function end to end: validate, resolve the caller, check the
    quota, call the model, then log and track the result.

    Nothing is persisted or tracked unless the completion succeeds.

    Raises:
        FigError: For any expected failure along the pipeline.
    """
    code_trimmed = validate_request(fig_function, request, config)

    conn = None
    try:
        conn = await open_connection()

        # 1. Resolve the caller
        identity_result = await resolve_identity(conn, credential_from_request(request))
        identity = identity_result.identity

        # 2. Gate on the monthly quota
        if await does_exceed_quota(conn, identity):
            raise QuotaExceededError(
                "Monthly quota exceeded. Upgrade your plan to continue"
            )

        # 3. Build the prompt and call the model
        log_id = uuid.uuid4()
        prompt_request = select_prompt(fig_function, code_trimmed, request)
        raw_text = await generate_completion(
            prompt_request, config, identity.user_id, str(log_id)
        )
        output = prompt_request.post_format(raw_text)

        # 4. Persist and track
        await save_log_record(
            conn,
            LogRecord(
                id=log_id,
                email=identity.email,
                fig_function=fig_function,
                input=code_trimmed,
                output=output,
                source=request.source,
                input_language=request.input_language,
                output_language=request.output_language,
            ),
        )
        track_function_event(
            identity.user_id,
            fig_function,
            request.source,
            request.input_language,
            request.output_language,
        )

        logging.info(
            f"Finished {fig_function.value} for {identity.email}: id={log_id}, "
            f"template={prompt_request.name}"
        )
        return FunctionResponse(
            id=log_id, output=output, new_tokens=identity_result.new_tokens
        )
    finally:
        if conn:
            await conn.close()
