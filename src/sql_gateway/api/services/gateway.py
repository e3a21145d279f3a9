"""Verb-gated SQL execution over the shared engine.

The gateway trusts statement text completely once the verb gate passes:
statements are never split, rewritten, or parameterized. They reach the
driver exactly as received, with DB-API "no parameters" semantics so that
``%`` characters are not treated as placeholders.
"""

from typing import Any

import structlog
from sqlalchemy.engine import Engine

from sql_gateway import messages
from sql_gateway.errors import MissingStatementError, StatementNotAllowedError
from sql_gateway.statements import StatementClass, classify

logger = structlog.get_logger(__name__)

# HTTP method -> (only statement class it may run, rejection message)
VERB_GATES: dict[str, tuple[StatementClass, str]] = {
    "GET": (StatementClass.SELECT, messages.ERR_ONLY_SELECT_GET),
    "POST": (StatementClass.INSERT, messages.ERR_ONLY_INSERT_POST),
}


class SqlGateway:
    """Runs caller-supplied SQL, gated by the HTTP verb it arrived under.

    One instance is built at startup around the shared engine and reused by
    every request. Each call borrows one pooled connection for exactly one
    statement.

    Example Usage:
        >>> gateway = SqlGateway(engine)
        >>> gateway.execute("SELECT 1 AS one", "GET")
        {'ok': True, 'rows': [{'one': 1}]}
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    def check(self, statement: str | None, method: str) -> StatementClass:
        """Validate ``statement`` against the gate for ``method``.

        Raises:
            MissingStatementError: If the statement is empty after trimming
            StatementNotAllowedError: If the statement class does not match the verb
        """
        if not statement or not statement.strip():
            raise MissingStatementError()

        allowed, message = VERB_GATES[method.upper()]
        statement_class = classify(statement)
        if statement_class is not allowed:
            logger.info(
                "statement_rejected",
                method=method.upper(),
                statement_class=statement_class.value,
            )
            raise StatementNotAllowedError(message)
        return statement_class

    def execute(self, statement: str | None, method: str) -> dict[str, Any]:
        """Gate and run ``statement``, returning the success envelope.

        Args:
            statement: SQL text, passed to the driver verbatim
            method: HTTP method the statement arrived under (GET or POST)

        Returns:
            dict: ``{"ok": True, "rows": [...]}`` for SELECT, or
            ``{"ok": True, "affectedRows": n, "insertId": id | None}`` for INSERT
        """
        statement_class = self.check(statement, method)
        if statement_class is StatementClass.SELECT:
            return {"ok": True, "rows": self.select(statement)}
        return {"ok": True, **self.insert(statement)}

    def select(self, statement: str) -> list[dict[str, Any]]:
        with self.engine.connect() as conn:
            result = conn.execution_options(no_parameters=True).exec_driver_sql(statement)
            rows = [dict(row) for row in result.mappings()]

        logger.info("statement_executed", statement_class="SELECT", row_count=len(rows))
        return rows

    def insert(self, statement: str) -> dict[str, Any]:
        # engine.begin() commits on success and rolls back on error
        with self.engine.begin() as conn:
            result = conn.execution_options(no_parameters=True).exec_driver_sql(statement)
            affected = result.rowcount
            insert_id = result.lastrowid or None

        logger.info(
            "statement_executed",
            statement_class="INSERT",
            affected_rows=affected,
            insert_id=insert_id,
        )
        return {"affectedRows": affected, "insertId": insert_id}
