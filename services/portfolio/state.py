"""
Application state for several named portfolios plus their combined view.

Every transition rebuilds the touched portfolio's view and then the combined
view from the flat holding lists, so derived data can never drift from the
holdings. Transitions are pure (``reduce_state``); ``PortfolioStore`` applies
them one at a time under a lock.
"""
from __future__ import annotations

import logging
import threading
import uuid
from itertools import chain
from typing import Annotated, Iterable, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from config.portfolio_config import MANUAL_ACCOUNT, MANUAL_ID_PREFIX
from models.holding import CamelModel, Holding
from models.portfolio import NamedPortfolioData, PortfolioData
from schemas.holding import HoldingInput
from services.portfolio.recalculator import recalculate
from services.portfolio.types import AssetTypeOrder

logger = logging.getLogger(__name__)


class AppState(CamelModel):
    individual: List[NamedPortfolioData]
    combined: PortfolioData


# ── actions ─────────────────────────────────────────────────────────

class _Action(BaseModel):
    model_config = ConfigDict(frozen=True)


class LoadPortfolios(_Action):
    kind: Literal["load"] = "load"
    portfolios: List[NamedPortfolioData]


class AddHolding(_Action):
    kind: Literal["add"] = "add"
    portfolio_index: int
    holding: HoldingInput


class UpdateHolding(_Action):
    kind: Literal["update"] = "update"
    portfolio_index: int
    holding: Holding


class DeleteHolding(_Action):
    kind: Literal["delete"] = "delete"
    portfolio_index: int
    holding_id: str


class ResetState(_Action):
    kind: Literal["reset"] = "reset"


Action = Annotated[
    Union[LoadPortfolios, AddHolding, UpdateHolding, DeleteHolding, ResetState],
    Field(discriminator="kind"),
]


# ── helpers ─────────────────────────────────────────────────────────

def new_holding_id() -> str:
    return f"{MANUAL_ID_PREFIX}_{uuid.uuid4().hex}"


def build_named_portfolio(
    name: str,
    holdings: Iterable[Holding],
    *,
    order: AssetTypeOrder | None = None,
) -> NamedPortfolioData:
    return NamedPortfolioData(name=name, data=recalculate(holdings, order=order))


def _build_state(individual: List[NamedPortfolioData], order: AssetTypeOrder | None) -> AppState:
    everything = chain.from_iterable(p.data.holdings for p in individual)
    return AppState(individual=individual, combined=recalculate(everything, order=order))


def _replace_holdings(
    state: AppState,
    index: int,
    holdings: List[Holding],
    order: AssetTypeOrder | None,
) -> AppState:
    individual = list(state.individual)
    individual[index] = build_named_portfolio(individual[index].name, holdings, order=order)
    return _build_state(individual, order)


def _has_portfolio(state: AppState, index: int) -> bool:
    return 0 <= index < len(state.individual)


# ── reducer ─────────────────────────────────────────────────────────

def reduce_state(
    state: Optional[AppState],
    action: Action,
    *,
    order: AssetTypeOrder | None = None,
) -> Optional[AppState]:
    """
    Return the state after ``action``. Stale references (nothing loaded,
    unknown portfolio index, unknown holding id) return ``state`` unchanged.
    """
    if isinstance(action, ResetState):
        logger.info("state_reset")
        return None

    if isinstance(action, LoadPortfolios):
        individual = [
            build_named_portfolio(p.name, p.data.holdings, order=order)
            for p in action.portfolios
        ]
        new_state = _build_state(individual, order)
        logger.info(
            "portfolios_loaded portfolios=%d holdings=%d",
            len(individual), len(new_state.combined.holdings),
        )
        return new_state

    if state is None:
        logger.warning("state_action_ignored action=%s reason=no_state", action.kind)
        return state

    if not _has_portfolio(state, action.portfolio_index):
        logger.warning(
            "state_action_ignored action=%s portfolio_index=%d reason=unknown_portfolio",
            action.kind, action.portfolio_index,
        )
        return state

    index = action.portfolio_index
    current = state.individual[index].data.holdings

    if isinstance(action, AddHolding):
        new_holding = action.holding.to_holding(holding_id=new_holding_id(), account=MANUAL_ACCOUNT)
        holdings = [*current, new_holding]
        logger.info("holding_added portfolio_index=%d holding_id=%s", index, new_holding.id)

    elif isinstance(action, UpdateHolding):
        target_id = action.holding.id
        if not any(h.id == target_id for h in current):
            logger.warning(
                "state_action_ignored action=update portfolio_index=%d holding_id=%s reason=unknown_holding",
                index, target_id,
            )
            return state
        holdings = [action.holding if h.id == target_id else h for h in current]
        logger.info("holding_updated portfolio_index=%d holding_id=%s", index, target_id)

    elif isinstance(action, DeleteHolding):
        holdings = [h for h in current if h.id != action.holding_id]
        if len(holdings) == len(current):
            logger.warning(
                "state_action_ignored action=delete portfolio_index=%d holding_id=%s reason=unknown_holding",
                index, action.holding_id,
            )
            return state
        logger.info("holding_deleted portfolio_index=%d holding_id=%s", index, action.holding_id)

    else:
        # unreachable for validated actions; keeps the Action union exhaustive for type checkers
        raise TypeError(f"Unsupported action: {type(action).__name__}")

    return _replace_holdings(state, index, holdings, order)


# ── store ───────────────────────────────────────────────────────────

class PortfolioStore:
    """Holds the current AppState; each dispatch is read-compute-replace under one lock."""

    def __init__(self, *, order: AssetTypeOrder | None = None):
        self._order = order
        self._state: Optional[AppState] = None
        self._lock = threading.Lock()

    @property
    def state(self) -> Optional[AppState]:
        return self._state

    def dispatch(self, action: Action) -> Optional[AppState]:
        with self._lock:
            self._state = reduce_state(self._state, action, order=self._order)
            return self._state

    def load(self, portfolios: List[NamedPortfolioData]) -> Optional[AppState]:
        return self.dispatch(LoadPortfolios(portfolios=portfolios))

    def add_holding(self, portfolio_index: int, holding: HoldingInput) -> Optional[AppState]:
        return self.dispatch(AddHolding(portfolio_index=portfolio_index, holding=holding))

    def update_holding(self, portfolio_index: int, holding: Holding) -> Optional[AppState]:
        return self.dispatch(UpdateHolding(portfolio_index=portfolio_index, holding=holding))

    def delete_holding(self, portfolio_index: int, holding_id: str) -> Optional[AppState]:
        return self.dispatch(DeleteHolding(portfolio_index=portfolio_index, holding_id=holding_id))

    def reset(self) -> None:
        self.dispatch(ResetState())
