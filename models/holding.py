from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Frozen record that reads and writes the camelCase names the frontend uses."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class Holding(CamelModel):
    # unique within one portfolio only; opaque to the engine
    id: str
    name: str
    type: str               # asset class label, e.g. "国内株式"
    account: str            # custody account, or the manual-entry sentinel
    value: float
    gain_loss: float        # unrealized, signed

    @field_validator("id", mode="before")
    @classmethod
    def _id_to_str(cls, v: Any) -> Any:
        # importers may hand us numeric row ids
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v
