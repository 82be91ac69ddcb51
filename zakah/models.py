from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Tuple

from . import config


class NisabBasis(str, Enum):
    SILVER = "silver"
    GOLD = "gold"


class CalendarBasis(str, Enum):
    LUNAR = "lunar"
    SOLAR = "solar"


class StockMethod(str, Enum):
    TRADE = "trade"
    LONG_TERM = "longterm"


class SectionKind(str, Enum):
    ASSET = "asset"
    LIABILITY = "liability"


@dataclass(frozen=True)
class ReportSettings:
    nisab_basis: NisabBasis = NisabBasis.SILVER
    calendar: CalendarBasis = CalendarBasis.LUNAR
    stock_method: StockMethod = StockMethod.TRADE
    currency: str = config.DEFAULT_CURRENCY

    @property
    def rate(self) -> float:
        return config.LUNAR_RATE if self.calendar == CalendarBasis.LUNAR else config.SOLAR_RATE

    @property
    def nisab_grams(self) -> float:
        return config.SILVER_NISAB_GRAMS if self.nisab_basis == NisabBasis.SILVER else config.GOLD_NISAB_GRAMS


@dataclass(frozen=True)
class MetalPrices:
    gold_per_gram: float = 0.0
    silver_per_gram: float = 0.0


@dataclass(frozen=True)
class Section:
    """One block of the report: an ordered label -> amount mapping plus its total."""

    title: str
    kind: SectionKind
    accent: str
    items: Tuple[Tuple[str, float], ...] = field(default_factory=tuple)

    @property
    def entries(self) -> Dict[str, float]:
        return dict(self.items)

    @property
    def total(self) -> float:
        return sum(amount for _, amount in self.items)

    @property
    def visible_entries(self) -> List[Tuple[str, float]]:
        # zero rows still count toward the total, they are just not drawn
        return [(label, amount) for label, amount in self.items if amount > 0]


@dataclass(frozen=True)
class AggregationResult:
    settings: ReportSettings
    liquid: Section
    metals: Section
    investments: Section
    business: Section
    liabilities: Section
    total_assets: float
    total_liabilities: float
    net_wealth: float
    nisab_value: float
    rate: float
    is_eligible: bool
    obligation_due: float

    @property
    def asset_sections(self) -> Tuple[Section, Section, Section, Section]:
        return (self.liquid, self.metals, self.investments, self.business)


@dataclass(frozen=True)
class DateInfo:
    display: str
    iso: str
