"""Call sync or async handlers uniformly.

Route handlers may be ``def`` or ``async def``. Anything that calls one
goes through ``invoke`` so the sync/async check lives in one place.
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's a coroutine."""
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
