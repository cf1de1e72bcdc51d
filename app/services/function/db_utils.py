import asyncpg

from app.schemas.function import LogRecord
from app.utils.sanitize import sanitize_text


async def save_log_record(conn: asyncpg.Connection, record: LogRecord) -> None:
    """Inserts one completed fig function into the 'figs' table."""
    await conn.execute(
        """
        INSERT INTO figs
          (id, email, fig_function, input, output, source, input_language, output_language)
        VALUES ($1, $2, $3, $4, $5, $6, $7, $8)
        """,
        record.id,
        record.email,
        record.fig_function.value,
        sanitize_text(record.input) or "",
        sanitize_text(record.output) or "",
        record.source,
        record.input_language,
        record.output_language,
    )
