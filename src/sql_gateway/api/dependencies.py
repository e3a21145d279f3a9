"""FastAPI dependency injection providers.

The engine and the gateway built around it are created once in the app
lifespan and stored on ``app.state``. Routes receive them through these
providers instead of reading module globals, so tests can swap in any
engine through ``create_app(engine=...)``. Database sessions for the typed
routes come from ``api.db.database.get_db``.
"""

from typing import Annotated

from fastapi import Depends, Request

from sql_gateway.api.services.gateway import SqlGateway


def get_gateway(request: Request) -> SqlGateway:
    """Verb-gated SQL gateway bound to the shared engine."""
    return request.app.state.gateway


# ============================================================================
# Type Aliases for Route Injection
# ============================================================================

GatewayDep = Annotated[SqlGateway, Depends(get_gateway)]
