"""
Enumerations for compress client data models.

All enums are closed taxonomies - no values outside these sets are permitted.
"""

from enum import Enum


class OutcomeKind(str, Enum):
    """
    Classification of a single round trip to the compression service.

    SUCCESS and ACKNOWLEDGED are terminal and success-shaped.
    STILL_PROCESSING means the server accepted the work but has no result yet.
    FAILURE covers every non-2xx status that came back with a response.
    """

    SUCCESS = "success"
    STILL_PROCESSING = "still_processing"
    ACKNOWLEDGED = "acknowledged"
    FAILURE = "failure"


class RetryKind(str, Enum):
    """
    Why a logical request is being retried.

    The two kinds use independently tuned delay policies:
    - TRANSIENT_ERROR: exponential backoff with jitter (503, 429, connection failure)
    - STILL_PROCESSING: size-proportional poll delay
    """

    TRANSIENT_ERROR = "transient_error"
    STILL_PROCESSING = "still_processing"
