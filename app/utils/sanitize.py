from __future__ import annotations


def sanitize_text(value: str | None) -> str | None:
    """
    Make user code and model output safe for a PostgreSQL TEXT column.

    - Strips NUL (\x00), which Postgres rejects for TEXT
    - Replaces lone surrogates and other unencodable sequences
    """
    if value is None:
        return None
    without_nuls = value.replace("\x00", "")
    return without_nuls.encode("utf-8", "replace").decode("utf-8")
