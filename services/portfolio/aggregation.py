# services/portfolio/aggregation.py
from __future__ import annotations

from typing import Dict, Iterable, List

from models.holding import Holding
from models.portfolio import AggregatedHolding
from services.portfolio.types import AssetTypeOrder


def aggregate_by_name(
    holdings: Iterable[Holding],
    *,
    order: AssetTypeOrder | None = None,
) -> List[AggregatedHolding]:
    """
    Collapse holdings of the same instrument name into one row each.

    Rows are ordered by asset type rank, then by total value (largest first).
    Ties keep the order in which each name first appeared.
    The first holding seen for a name decides the row's type.
    """
    cfg = order or AssetTypeOrder.default()

    groups: Dict[str, List[Holding]] = {}
    for h in holdings:
        groups.setdefault(h.name, []).append(h)

    rows = [
        AggregatedHolding(
            name=name,
            type=members[0].type,
            total_value=sum((m.value for m in members), 0.0),
            total_gain_loss=sum((m.gain_loss for m in members), 0.0),
            sub_holdings=members,
        )
        for name, members in groups.items()
    ]
    # sorted() is stable, so equal keys stay in first-occurrence order
    return sorted(rows, key=lambda r: (cfg.rank(r.type), -r.total_value))
