from __future__ import annotations

from typing import Optional

from .process_set import ProcessRecord, ProcessSet


def selection_key(rec: ProcessRecord):
    # Shortest remaining first, then earliest arrival, then input order.
    return (rec.remaining_time, rec.arrival_time, rec.index)


def select_next(process_set: ProcessSet, now: int) -> Optional[ProcessRecord]:
    """
    Pick the eligible process to run at ``now``, or None when the CPU idles.
    """
    eligible = [rec for rec in process_set if rec.is_eligible(now)]
    if not eligible:
        return None
    return min(eligible, key=selection_key)
