# services/portfolio/recalculator.py
from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, List

from config.portfolio_config import MANUAL_ACCOUNT
from models.holding import Holding
from models.portfolio import GroupedData, PieSlice, PortfolioData
from services.portfolio.aggregation import aggregate_by_name
from services.portfolio.types import AssetTypeOrder

logger = logging.getLogger(__name__)


def account_key(h: Holding, manual_account: str = MANUAL_ACCOUNT) -> str:
    # Manual entries have no real account; bucket them by asset type instead.
    return h.type if h.account == manual_account else h.account


def _group(
    holdings: List[Holding],
    key_fn: Callable[[Holding], str],
    order: AssetTypeOrder,
) -> List[GroupedData]:
    buckets: Dict[str, List[Holding]] = {}
    for h in holdings:
        buckets.setdefault(key_fn(h), []).append(h)

    grouped = [
        GroupedData(
            name=key,
            value=sum((h.value for h in members), 0.0),
            gain_loss=sum((h.gain_loss for h in members), 0.0),
            aggregated_holdings=aggregate_by_name(members, order=order),
        )
        for key, members in buckets.items()
    ]
    return sorted(grouped, key=lambda g: -g.value)


def recalculate(
    holdings: Iterable[Holding],
    *,
    order: AssetTypeOrder | None = None,
    manual_account: str = MANUAL_ACCOUNT,
) -> PortfolioData:
    """
    Build every derived view (totals, by name, by asset class, by account,
    pie ranking) from a flat holding list. Never mutates its input.
    """
    cfg = order or AssetTypeOrder.default()
    items = list(holdings)

    aggregated = aggregate_by_name(items, order=cfg)
    pie = sorted(
        (PieSlice(name=a.name, value=a.total_value, type=a.type) for a in aggregated),
        key=lambda p: -p.value,
    )

    data = PortfolioData(
        total_value=sum((h.value for h in items), 0.0),
        total_gain_loss=sum((h.gain_loss for h in items), 0.0),
        aggregated_holdings=aggregated,
        by_asset_class=_group(items, lambda h: h.type, cfg),
        by_account=_group(items, lambda h: account_key(h, manual_account), cfg),
        by_holding_for_pie=pie,
        holdings=items,
    )
    logger.debug(
        "portfolio_recalculated holdings=%d names=%d asset_classes=%d accounts=%d",
        len(items), len(aggregated), len(data.by_asset_class), len(data.by_account),
    )
    return data
