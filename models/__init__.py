from .holding import Holding
from .portfolio import AggregatedHolding, GroupedData, PieSlice, PortfolioData, NamedPortfolioData
