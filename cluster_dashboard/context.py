"""Utilities for tracing store actions.

Every store action runs inside `trace_action`, which pushes a label on the
`trace` context variable. Actions started from within another action, such as
a refresh issued by a feature store, are logged nested under their parent.
"""

import contextvars
from contextlib import contextmanager
import logging
from time import perf_counter
from typing import Generator


_LOGGER = logging.getLogger(__name__)

# No public API
__all__: list[str] = []


trace: contextvars.ContextVar[tuple[str, ...]] = contextvars.ContextVar(
    "trace", default=()
)


def action_label(owner: str, action: str, request_id: int | None = None) -> str:
    """Return the label identifying one request issued by a store."""
    if request_id is None:
        return f"{owner}.{action}"
    return f"{owner}.{action}#{request_id}"


@contextmanager
def trace_action(
    owner: str, action: str, request_id: int | None = None
) -> Generator[None, None, None]:
    """Log the start, outcome and duration of a store request."""
    stack = trace.get() + (action_label(owner, action, request_id),)
    token = trace.set(stack)
    label = " > ".join(stack)
    start = perf_counter()
    outcome = "done"
    _LOGGER.debug("[Trace] > %s", label)
    try:
        yield
    except BaseException as err:
        outcome = err.__class__.__name__
        raise
    finally:
        trace.reset(token)
        _LOGGER.debug(
            "[Trace] < %s %s (%0.2fs)", label, outcome, perf_counter() - start
        )
