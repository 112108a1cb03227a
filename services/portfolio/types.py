# services/portfolio/types.py
from __future__ import annotations

from typing import Dict

from pydantic import BaseModel, ConfigDict, Field

from config.portfolio_config import ASSET_TYPE_ORDER, DEFAULT_TYPE_RANK


class AssetTypeOrder(BaseModel):
    """
    Display priority of asset types (lower rank sorts first).
    Passed into the aggregator so it can be swapped without touching logic.
    """
    model_config = ConfigDict(frozen=True)

    ranks: Dict[str, int] = Field(default_factory=lambda: dict(ASSET_TYPE_ORDER))
    default_rank: int = DEFAULT_TYPE_RANK

    @classmethod
    def default(cls) -> "AssetTypeOrder":
        return cls()

    def rank(self, asset_type: str) -> int:
        return self.ranks.get(asset_type, self.default_rank)
