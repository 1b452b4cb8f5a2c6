"""
repositories/ - Data Access Layer
==================================
Each repository encapsulates all SQL queries for a specific domain entity.
Repositories run their statements through ``db.access`` and return domain
model objects. None of them manage connections or transactions themselves.
"""
