"""
member_gateway.observability

Observability package.

Responsibilities:
- Structured logging configuration and request-context middleware.
"""

# Package marker.
