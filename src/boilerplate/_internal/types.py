"""Shared type aliases."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Route handler: takes a Request, returns a Response (sync or async)
Handler: TypeAlias = Callable[..., Any]
