"""FastAPI surface of the SQL gateway.

Architecture:
- API routes: raw SQL (``/sql``) and the typed patient resource (``/patients``)
- Services: the verb-gated SQL gateway
- Models: Pydantic schemas (API contracts) + SQLAlchemy (DB persistence)
- Dependencies: engine, session, and gateway injection from ``app.state``
"""
