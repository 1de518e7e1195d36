"""Ranked, truncated orderings of group summaries."""

from __future__ import annotations

from typing import List, Sequence

from library_events.domain.models import GroupSummary, Metric


def top_n(
    groups: Sequence[GroupSummary], metric: Metric | str, n: int
) -> List[GroupSummary]:
    """Sort ``groups`` descending by ``metric`` and keep the first ``n``.

    Ties keep their input order.
    """

    metric = Metric(metric)
    if n < 0:
        raise ValueError("n must be non-negative")
    # sorted() stays stable with reverse=True
    ranked = sorted(groups, key=lambda group: getattr(group, metric.value), reverse=True)
    return ranked[:n]
