"""Wall-clock helpers."""

import time


def unix_now() -> int:
    """Return wall-clock Unix time in whole seconds."""
    return int(time.time())
