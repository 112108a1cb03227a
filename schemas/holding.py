from models.holding import CamelModel, Holding


class HoldingInput(CamelModel):
    """Manual-add form payload: a holding without id/account."""

    name: str
    type: str
    value: float
    gain_loss: float

    def to_holding(self, *, holding_id: str, account: str) -> Holding:
        return Holding(id=holding_id, account=account, **self.model_dump())
