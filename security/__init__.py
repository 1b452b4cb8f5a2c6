"""
security/ - Access Control
===========================
Request identity and permission-level checks for the HTTP API.
"""
