"""
member_gateway.api

HTTP surface of the gateway (FastAPI).

Responsibilities:
- Thin request handlers that bind parameters and call exactly one service operation.
"""

# Package marker.
