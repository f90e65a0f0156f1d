"""
Hysteresis rules for the per-check fail count.

A failed probe pushes the count up by one, a successful probe lets it decay by
one. The count never leaves ``[0, ceiling]``, so recovering from a long outage
takes at most ``ceiling`` consecutive successes. Health is derived from the
count on every read and is never stored.
"""


def next_fail_count(fail_count: int, ok: bool, ceiling: int) -> int:
    """Fail count after one probe outcome, clamped to [0, ceiling]"""
    if ok:
        new_fail_count = max(fail_count - 1, 0)
    else:
        new_fail_count = fail_count + 1
    return min(max(new_fail_count, 0), ceiling)


def is_healthy(fail_count: int, healthy_threshold: int) -> bool:
    """Healthy while the fail count stays below the threshold.

    A threshold of 0 means the check is never healthy.
    """
    return fail_count < healthy_threshold


def is_due(now: int, interval: int) -> bool:
    """A check is due on every epoch second that is a multiple of its interval"""
    if interval <= 0:
        raise ValueError(f"check interval must be positive, got {interval}")
    return now % interval == 0
