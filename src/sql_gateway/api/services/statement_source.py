"""Where a request's SQL statement comes from.

GET: the ``q`` query parameter, else the URL-decoded path after the first
segment of a ``/sql``-prefixed path.
POST: chosen by content type - a JSON ``sql`` field, a form ``sql`` field,
or the whole raw body as text. Anything unreadable becomes an empty
statement, which the gateway rejects as missing.
"""

import json
from urllib.parse import parse_qs


def path_statement(suffix: str | None) -> str:
    """Statement carried in the path after the ``/sql`` prefix.

    ``suffix`` is the decoded path after ``/sql``. The rest of the first
    segment is dropped, so ``/sql/SELECT 1`` and ``/sqlx/SELECT 1`` both
    give ``SELECT 1`` while ``/sql`` and ``/sqlx`` give ``""``.
    """
    return "/".join((suffix or "").split("/")[1:])


def statement_from_query(q: str | None, path_tail: str | None = None) -> str:
    """Resolve a GET statement, preferring ``q`` over the path suffix."""
    return q or path_tail or ""


def _json_sql(raw: str) -> str:
    try:
        payload = json.loads(raw or "{}")
    except ValueError:
        return ""
    if not isinstance(payload, dict):
        return ""
    sql = payload.get("sql")
    return sql if isinstance(sql, str) else ""


def _form_sql(raw: str) -> str:
    values = parse_qs(raw, keep_blank_values=True).get("sql")
    return values[0] if values else ""


def statement_from_body(raw: bytes, content_type: str | None) -> str:
    """Resolve a POST statement from the raw body and its declared content type.

    Args:
        raw: Request body bytes (may be empty)
        content_type: Value of the Content-Type header, if any

    Returns:
        str: Trimmed statement text, or ``""`` if none could be read
    """
    text = raw.decode("utf-8", errors="replace") if raw else ""
    ctype = (content_type or "").lower()

    if "application/json" in ctype:
        sql = _json_sql(text)
    elif "application/x-www-form-urlencoded" in ctype:
        sql = _form_sql(text)
    else:
        sql = text
    return sql.strip()
