"""HTTP gateway for verb-gated raw SQL over a relational store.

GET requests may only run SELECT statements, POST requests may only run
INSERT statements. A typed ``/patients`` resource sits beside the raw SQL
routes for clients that should not see SQL at all.
"""

__version__ = "0.1.0"
