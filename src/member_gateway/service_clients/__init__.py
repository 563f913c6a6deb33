"""
member_gateway.service_clients

Backend service client package.

Responsibilities:
- Provide one async client per backend (package, update, device, deployment, component).
- Translate every failed call into `RemoteServiceFailure`.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services depend on these client classes, never on httpx directly.
