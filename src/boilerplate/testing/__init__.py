"""Test utilities for boilerplate applications.

    from boilerplate.testing import TestClient
"""

from boilerplate.testing.client import TestClient

__all__ = ["TestClient"]
