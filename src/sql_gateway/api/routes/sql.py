"""Raw SQL API routes.

Endpoints:
- GET /sql?q=<SELECT ...> - Run a SELECT-class statement
- GET /sql/<SELECT ...> - Same, with the statement URL-encoded in the path
- POST /sql - Run an INSERT-class statement (JSON, form, or raw text body)

Any GET path starting with ``/sql`` reaches the select handler; the path
statement is whatever follows the first segment.
"""

from typing import Annotated

from fastapi import APIRouter, Path, Query, Request
from starlette.concurrency import run_in_threadpool

from sql_gateway.api.dependencies import GatewayDep
from sql_gateway.api.models import schemas
from sql_gateway.api.services.statement_source import (
    path_statement,
    statement_from_body,
    statement_from_query,
)

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": schemas.ErrorResponse, "description": "Missing SQL statement"},
    405: {"model": schemas.ErrorResponse, "description": "Statement class not allowed for this verb"},
}


# ============================================================================
# GET /sql* - Run SELECT
# ============================================================================


@router.get("/sql{suffix:path}", response_model=schemas.SelectResponse, responses=ERROR_RESPONSES)
async def select_statement(
    suffix: Annotated[str, Path(description="Path after /sql; a statement may follow the first segment")],
    gateway: GatewayDep,
    q: Annotated[str | None, Query(description="SELECT statement to run (takes priority)")] = None,
) -> dict:
    """Run a SELECT statement from ``q``, or from the path when ``q`` is absent.

    Example:
        GET /sql?q=SELECT%20*%20FROM%20patient

        Response (200):
        {"ok": true, "rows": [{"patientid": 1, "name": "Alice", ...}]}

        GET /sql/SELECT%20COUNT(*)%20AS%20n%20FROM%20patient

        Response (200):
        {"ok": true, "rows": [{"n": 2}]}
    """
    statement = statement_from_query(q, path_statement(suffix))
    return await run_in_threadpool(gateway.execute, statement, "GET")


# ============================================================================
# POST /sql - Run INSERT
# ============================================================================


@router.post("/sql", response_model=schemas.InsertResponse, responses=ERROR_RESPONSES)
async def insert_from_body(request: Request, gateway: GatewayDep) -> dict:
    """Run an INSERT statement taken from the request body.

    The body may be JSON (``{"sql": "..."}``), a urlencoded form
    (``sql=...``), or the statement itself as plain text.

    Example:
        POST /sql
        {"sql": "INSERT INTO patient (name, dateOfBirth) VALUES ('Alice', '2000-01-01')"}

        Response (200):
        {"ok": true, "affectedRows": 1, "insertId": 1}
    """
    raw = await request.body()
    statement = statement_from_body(raw, request.headers.get("content-type"))
    return await run_in_threadpool(gateway.execute, statement, "POST")
