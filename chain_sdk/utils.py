"""
Utility functions for the Chain SDK.
"""
import uuid
from typing import Optional

YES = "yes"
NO = "no"


def new_client_token() -> str:
    """
    Generate a fresh idempotency token.

    Chain Core uses the token to recognize retried requests so that they
    are applied at most once.

    Returns:
        Random UUID4 string
    """
    return str(uuid.uuid4())


def is_yes(value: Optional[str]) -> bool:
    """
    Interpret a "yes"/"no" wire flag.

    Args:
        value: Flag as received from the server (may be None)

    Returns:
        True only for "yes"

    Raises:
        ValueError: If the value is neither "yes", "no" nor None
    """
    if value is None or value == NO:
        return False
    if value == YES:
        return True
    raise ValueError(f"Expected 'yes' or 'no', got: {value!r}")
