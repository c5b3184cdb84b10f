"""Aggregate donor counts against per-group targets."""
import math
from collections import Counter

from .storage import BLOOD_GROUPS

NO_GROUP = '—'


def count_by_group(donors):
    """Count donors per blood group, missing groups read as 0"""
    return Counter(d.get('blood_group') for d in donors)


def most_needed(counts, targets):
    """
    Return the blood group with the lowest count/target ratio.

    Only canonical groups present in ``targets`` take part. A target of 0 is
    treated as 1. Equal ratios keep the group that comes first in
    BLOOD_GROUPS. An empty table gives NO_GROUP.
    """
    best_group = NO_GROUP
    best_ratio = math.inf
    for group in BLOOD_GROUPS:
        if group not in targets:
            continue
        ratio = counts.get(group, 0) / (targets[group] or 1)
        if ratio < best_ratio:
            best_ratio = ratio
            best_group = group
    return best_group


def percent_of_target(count, target):
    """Progress towards ``target`` in whole percent, clamped to 0..100; None when target is 0"""
    if not target:
        return None
    # Half-up, so 12.5 shows as 13
    percent = math.floor(count / target * 100 + 0.5)
    return min(100, max(0, percent))
