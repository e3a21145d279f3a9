"""Domain errors raised by the gateway and turned into JSON envelopes at the boundary."""

from fastapi import status

from sql_gateway import messages


class GatewayError(Exception):
    """Base class for errors that map to a client-facing status and message."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = messages.ERR_SERVER

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingStatementError(GatewayError):
    """No SQL statement was supplied, or it was blank."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = messages.ERR_MISSING_SQL


class StatementNotAllowedError(GatewayError):
    """The statement's class is not the one the HTTP verb permits."""

    status_code = status.HTTP_405_METHOD_NOT_ALLOWED
