"""
member_gateway

Top-level package for the member gateway: the orchestration tier in front of the
package, update, device and deployment services of the device fleet platform.

Responsibilities:
- Expose package version metadata.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"


# --- Module Notes -----------------------------------------------------------
# Keep this file minimal to avoid import-time side effects across the codebase.
