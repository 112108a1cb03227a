from __future__ import annotations

from typing import List, Optional

from models.holding import CamelModel, Holding


class AggregatedHolding(CamelModel):
    """All holdings sharing one instrument name, summed."""

    name: str
    type: str
    total_value: float
    total_gain_loss: float
    sub_holdings: List[Holding]


class GroupedData(CamelModel):
    """One asset-class or account bucket."""

    name: str
    value: float
    gain_loss: float
    aggregated_holdings: List[AggregatedHolding]


class PieSlice(CamelModel):
    name: str
    value: float
    type: str


class PortfolioData(CamelModel):
    total_value: float
    total_gain_loss: float
    aggregated_holdings: List[AggregatedHolding]
    by_asset_class: List[GroupedData]
    by_account: List[GroupedData]
    by_holding_for_pie: List[PieSlice]
    # source of truth; every other field is derived from it
    holdings: List[Holding]

    @classmethod
    def empty(cls) -> "PortfolioData":
        return cls(
            total_value=0.0,
            total_gain_loss=0.0,
            aggregated_holdings=[],
            by_asset_class=[],
            by_account=[],
            by_holding_for_pie=[],
            holdings=[],
        )

    def get_holding(self, holding_id: str) -> Optional[Holding]:
        for h in self.holdings:
            if h.id == holding_id:
                return h
        return None


class NamedPortfolioData(CamelModel):
    """One imported source (file / account group) and its derived view."""

    name: str
    data: PortfolioData
