"""Identifier generation for tickets, comments and projects."""
import random
import string
import time
from typing import Collection, Optional
from ticket_tally.exceptions import ConflictError

_BASE36 = string.digits + string.ascii_lowercase
_TICKET_ID_SPACE = 90000


def _random_suffix(length: int = 9) -> str:
    return "".join(random.choice(_BASE36) for _ in range(length))


def _epoch_ms() -> int:
    return int(time.time() * 1000)


def generate_ticket_id(existing: Optional[Collection[str]] = None) -> str:
    """
    Generate a ticket ID.
    Format: TKT-{5 digits}
    Example: TKT-48213

    The number space is small, so a candidate that collides with
    ``existing`` is drawn again.
    """
    taken = existing or ()
    if len(taken) >= _TICKET_ID_SPACE:
        raise ConflictError("Ticket ID space exhausted")
    while True:
        candidate = f"TKT-{random.randint(10000, 99999)}"
        if candidate not in taken:
            return candidate


def generate_comment_id() -> str:
    """Format: CMT-{epoch ms}-{9 base36 chars}"""
    return f"CMT-{_epoch_ms()}-{_random_suffix()}"


def generate_project_id() -> str:
    """Format: PRJ-{epoch ms}-{9 base36 chars}"""
    return f"PRJ-{_epoch_ms()}-{_random_suffix()}"
