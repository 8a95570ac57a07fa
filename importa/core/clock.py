from datetime import datetime
from typing import Callable

# Zero-argument time source; reporters take one so runs can be replayed in tests.
Clock = Callable[[], datetime]


def local_now() -> datetime:
    """Current local time, timezone-aware."""
    return datetime.now().astimezone()
