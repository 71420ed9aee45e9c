"""
Cost estimation for compression requests.

Pure functions that turn payload shape into timing parameters:
- effective size (character count, message count)
- synchronous per-call timeout (step function of message count + length term)
- processing poll delay (proportional to content size)
- exponential backoff delay with jitter (proportional to attempt number)

No I/O and no state. All durations are integer milliseconds.
"""

import math
import random
from typing import Callable

from compress_client.models.content import Content

# Per-call timeout step function
BASE_TIMEOUT_MS = 10_000
TIMEOUT_CEILING_MS = 120_000
LENGTH_BLOCK_CHARS = 10_000
LENGTH_BLOCK_MS = 1_000

# (upper message count of band, per-message increment in ms)
TIMEOUT_BANDS: tuple[tuple[int, int], ...] = (
    (10, 300),
    (30, 600),
    (50, 1_000),
    (100, 300),
)

# Processing poll
POLL_UNIT_MS = 60_000
POLL_CHUNK_CHARS = 15_000

# Backoff
DEFAULT_BACKOFF_BASE_MS = 10_000
DEFAULT_BACKOFF_CAP_MS = 600_000
DEFAULT_BACKOFF_FACTOR = 2.0
JITTER_RATIO = 0.3

# Content limits
MAX_CONTENT_LENGTH = 800_000
MESSAGE_COUNT_WARNING_THRESHOLD = 100


def effective_length(content: Content) -> int:
    """
    Total character count of the payload.

    Sum of message texts for a message list, string length for a text blob.
    """
    if isinstance(content, str):
        return len(content)
    return sum(len(msg.message or "") for msg in content)


def message_count(content: Content) -> int:
    """Number of messages, or 1 for a text blob."""
    if isinstance(content, str):
        return 1
    return len(content)


def _message_count_timeout_ms(count: int) -> int:
    """
    Message-count contribution to the per-call timeout.

    Each band adds its per-message increment on top of the totals of the
    previous bands, so the function is continuous at band boundaries.
    Above the last band it saturates at the ceiling.
    """
    if count > TIMEOUT_BANDS[-1][0]:
        return TIMEOUT_CEILING_MS

    timeout = BASE_TIMEOUT_MS
    lower = 0
    for upper, increment in TIMEOUT_BANDS:
        in_band = min(count, upper) - lower
        if in_band <= 0:
            break
        timeout += in_band * increment
        lower = upper
    return timeout


def sync_timeout_ms(content: Content, ceiling_ms: int = TIMEOUT_CEILING_MS) -> int:
    """
    Per-call timeout for a synchronous request.

    Step function of the message count plus one second per started block of
    10,000 characters, clamped to the ceiling. More than 100 messages always
    yields the ceiling, which signals that webhook delivery should be used.

    Args:
        content: Text blob or message list
        ceiling_ms: Hard upper bound (never above TIMEOUT_CEILING_MS)

    Returns:
        Timeout in milliseconds
    """
    ceiling_ms = min(ceiling_ms, TIMEOUT_CEILING_MS)
    timeout = _message_count_timeout_ms(message_count(content))
    timeout += math.ceil(effective_length(content) / LENGTH_BLOCK_CHARS) * LENGTH_BLOCK_MS
    return min(timeout, ceiling_ms)


def processing_poll_delay_ms(
    length: int,
    unit_ms: int = POLL_UNIT_MS,
    chunk_chars: int = POLL_CHUNK_CHARS,
) -> int:
    """
    Delay before re-polling content the service is still processing.

    One unit per started chunk of characters, at least one unit. The delay
    depends on content size only, never on how often we already asked.

    Examples:
        >>> processing_poll_delay_ms(15_000)
        60000
        >>> processing_poll_delay_ms(15_001)
        120000
    """
    units = max(1, math.ceil(length / chunk_chars))
    return units * unit_ms


def backoff_delay_ms(
    attempt: int,
    base_ms: int = DEFAULT_BACKOFF_BASE_MS,
    cap_ms: int = DEFAULT_BACKOFF_CAP_MS,
    factor: float = DEFAULT_BACKOFF_FACTOR,
    rand: Callable[[], float] = random.random,
) -> int:
    """
    Exponential backoff delay with jitter.

    ``min(base * factor ** (attempt - 1), cap)`` plus up to 30% random jitter
    of that value, so concurrent clients do not retry in lockstep.

    Args:
        attempt: 1-indexed attempt number
        base_ms: Delay for attempt 1 (before jitter)
        cap_ms: Upper bound before jitter
        factor: Growth factor per attempt
        rand: Source of uniform [0, 1) values

    Returns:
        Delay in milliseconds, in [delay, delay * 1.3)
    """
    if attempt < 1:
        raise ValueError(f"attempt must be >= 1, got {attempt}")
    try:
        grown = base_ms * factor ** (attempt - 1)
    except OverflowError:
        grown = cap_ms if base_ms > 0 else 0
    delay = min(grown, cap_ms)
    jitter = rand() * JITTER_RATIO * delay
    return math.floor(delay + jitter)
