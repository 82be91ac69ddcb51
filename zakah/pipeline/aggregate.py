from __future__ import annotations

import logging
from typing import List, Tuple

from .. import config
from ..models import (
    AggregationResult,
    MetalPrices,
    NisabBasis,
    ReportSettings,
    Section,
    SectionKind,
    StockMethod,
)
from .ingest import (
    BUSINESS_FIELDS,
    GOLD_FIELDS,
    LIABILITY_FIELDS,
    LIQUID_FIELDS,
    OTHER_INVESTMENT_FIELDS,
    SILVER_FIELDS,
    TRADABLE_FIELDS,
    ValueReader,
)

logger = logging.getLogger(__name__)

SECTION_TITLES = {
    "liquid": "SECTION A — CASH & LIQUID ASSETS",
    "metals": "SECTION B — PRECIOUS METALS & JEWELRY",
    "investments": "SECTION C — INVESTMENTS & FINANCIAL ASSETS",
    "business": "SECTION D — BUSINESS ASSETS",
    "liabilities": "SECTION E — LIABILITIES & DEDUCTIONS",
}

SECTION_ACCENTS = {
    "liquid": "teal",
    "metals": "gold",
    "investments": "teal",
    "business": "purple",
    "liabilities": "red",
}

PROXY_SUFFIX = " (25% proxy)"


def _price(value: float) -> float:
    return value if value and value > 0 else 0.0


def _plain_items(reader: ValueReader, fields: List[tuple[str, str]]) -> List[Tuple[str, float]]:
    return [(label, reader.read(field_id)) for field_id, label in fields]


def _metal_items(reader: ValueReader, prices: MetalPrices) -> List[Tuple[str, float]]:
    gold = _price(prices.gold_per_gram)
    silver = _price(prices.silver_per_gram)
    items: List[Tuple[str, float]] = []
    for field_id, label, purity in GOLD_FIELDS:
        grams = reader.read(field_id)
        items.append((f"{label}: {grams:.3f}g", grams * purity * gold))
    for field_id, label in SILVER_FIELDS:
        grams = reader.read(field_id)
        items.append((f"{label}: {grams:.3f}g", grams * silver))
    return items


def _investment_items(reader: ValueReader, method: StockMethod) -> List[Tuple[str, float]]:
    long_term = method == StockMethod.LONG_TERM
    factor = config.LONG_TERM_PROXY if long_term else 1.0
    suffix = PROXY_SUFFIX if long_term else ""
    items = [(f"{label}{suffix}", reader.read(field_id) * factor) for field_id, label in TRADABLE_FIELDS]
    items.extend(_plain_items(reader, OTHER_INVESTMENT_FIELDS))
    return items


def _section(key: str, kind: SectionKind, items: List[Tuple[str, float]]) -> Section:
    return Section(
        title=SECTION_TITLES[key],
        kind=kind,
        accent=SECTION_ACCENTS[key],
        items=tuple(items),
    )


def nisab_value(prices: MetalPrices, settings: ReportSettings) -> float:
    if settings.nisab_basis == NisabBasis.SILVER:
        unit_price = _price(prices.silver_per_gram)
    else:
        unit_price = _price(prices.gold_per_gram)
    return settings.nisab_grams * unit_price


def aggregate(reader: ValueReader, prices: MetalPrices, settings: ReportSettings) -> AggregationResult:
    liquid = _section("liquid", SectionKind.ASSET, _plain_items(reader, LIQUID_FIELDS))
    metals = _section("metals", SectionKind.ASSET, _metal_items(reader, prices))
    investments = _section("investments", SectionKind.ASSET, _investment_items(reader, settings.stock_method))
    business = _section("business", SectionKind.ASSET, _plain_items(reader, BUSINESS_FIELDS))
    liabilities = _section("liabilities", SectionKind.LIABILITY, _plain_items(reader, LIABILITY_FIELDS))

    total_assets = liquid.total + metals.total + investments.total + business.total
    total_liabilities = liabilities.total
    net_wealth = max(0.0, total_assets - total_liabilities)
    threshold = nisab_value(prices, settings)
    rate = settings.rate
    is_eligible = threshold > 0 and net_wealth >= threshold
    obligation_due = net_wealth * rate if is_eligible else 0.0

    if threshold == 0:
        logger.warning("No %s price available; nisab threshold is zero", settings.nisab_basis.value)
    logger.debug(
        "Aggregated assets=%.2f liabilities=%.2f net=%.2f nisab=%.2f eligible=%s",
        total_assets,
        total_liabilities,
        net_wealth,
        threshold,
        is_eligible,
    )

    return AggregationResult(
        settings=settings,
        liquid=liquid,
        metals=metals,
        investments=investments,
        business=business,
        liabilities=liabilities,
        total_assets=total_assets,
        total_liabilities=total_liabilities,
        net_wealth=net_wealth,
        nisab_value=threshold,
        rate=rate,
        is_eligible=is_eligible,
        obligation_due=obligation_due,
    )
