"""
member_gateway.services

Service-layer package: the aggregation and consistency rules of the gateway.

Responsibilities:
- Enforce ownership chains across entities owned by different backends.
- Synthesize the virtual "other" segment and derived segment/version fields.
- Assemble detailed update views from several backend answers.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services hold no state between calls and are built per request from the shared clients;
# tests drive them with fake clients.
