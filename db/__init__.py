"""
db/ - Database Layer
====================
Handles the PostgreSQL connection pool, schema initialization, and the
relational access layer (query / query_one / insert / update / transaction).
This layer is the lowest in the architecture and has no dependencies on other layers.
"""
