"""
Timing utilities for outbound calls

Prints ``[TIMING]`` lines around LLM, GitHub and identity-service calls so
slow collaborators are visible in the request log.
"""

import time
from contextlib import asynccontextmanager
from typing import Optional


def log_timing(component: str, action: str, duration_ms: Optional[float] = None):
    """Log a timing event in standard format."""
    if duration_ms is not None:
        print(f"[TIMING] {component}: {action} — duration={duration_ms:.0f}ms")
    else:
        print(f"[TIMING] {component}: {action}")


@asynccontextmanager
async def async_timer(component: str, action: str = "CALL"):
    """Async context manager for timing a single outbound call."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration_ms = (time.perf_counter() - start) * 1000
        log_timing(component, action, duration_ms)
