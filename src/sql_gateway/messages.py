"""
Gateway Messages - Centralized user-facing strings.

Simple module-level constants returned in response bodies.
Keep it lightweight - no classes or complex structures.
"""

# Health check
OK = "OK"

# SQL gateway errors
ERR_MISSING_SQL = "Missing SQL statement."
ERR_ONLY_SELECT_GET = "Only SELECT is allowed over GET."
ERR_ONLY_INSERT_POST = "Only INSERT is allowed over POST."

# Routing and body errors
ERR_NOT_FOUND = "Not found."
ERR_INVALID_JSON = "Invalid JSON body."
ERR_VALIDATION = "Invalid request: {fields}"

# Fallback for anything unhandled
ERR_SERVER = "Internal server error."
