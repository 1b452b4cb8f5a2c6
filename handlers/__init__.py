"""
handlers/ - Presentation Layer
================================
FastAPI routers. Each route validates its body with pydantic, checks the
caller's permission level, delegates to the appropriate Service and
returns the result as JSON. No business logic lives here.
"""
