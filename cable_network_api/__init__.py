"""
Top‑level package for the Cable Network API.

Locations of installed network services, the service catalog they
refer to, and the administrator map (GeoJSON) kept in step with them.
All functionality lives in submodules under ``app``.
"""

__all__ = []
