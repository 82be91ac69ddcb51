from __future__ import annotations

import csv
import json
import math
from pathlib import Path
from typing import Dict, List, Mapping


REQUIRED_COLUMNS = {"field", "value"}

LIQUID_FIELDS: List[tuple[str, str]] = [
    ("f_cashOnHand", "Cash on Hand"),
    ("f_cashForeign", "Foreign Currency"),
    ("f_bankSavings", "Savings Account"),
    ("f_bankCurrent", "Current / Checking"),
    ("f_bankFD", "FDR / Fixed Deposits"),
    ("f_bkash", "bKash"),
    ("f_nagad", "Nagad"),
    ("f_upay", "Upay"),
    ("f_cellfin", "Cellfin"),
    ("f_rocket", "Rocket / DBBL"),
    ("f_paypal", "PayPal / Payoneer"),
    ("f_othersWallet", "Other Digital Wallets"),
    ("f_moneyLent", "Money Lent to Others"),
    ("f_salaryDue", "Salary / Bonus Due"),
]

# (field, label prefix, purity multiplier)
GOLD_FIELDS: List[tuple[str, str, float]] = [
    ("f_gold24k", "Gold 24k", 24 / 24),
    ("f_gold22k", "Gold 22k", 22 / 24),
    ("f_gold18k", "Gold 18k", 18 / 24),
    ("f_gold21k", "Gold 21k", 21 / 24),
    ("f_goldCoins", "Gold Coins/Bars 24k", 1.0),
]

SILVER_FIELDS: List[tuple[str, str]] = [
    ("f_silverGrams", "Silver"),
    ("f_silverBullion", "Silver Bullion"),
]

# The first three are valued at the long-term proxy when that method is chosen.
TRADABLE_FIELDS: List[tuple[str, str]] = [
    ("f_dseStocks", "DSE Stocks"),
    ("f_intlStocks", "International Stocks"),
    ("f_mutualFunds", "Mutual Funds / ETFs"),
]

OTHER_INVESTMENT_FIELDS: List[tuple[str, str]] = [
    ("f_btc", "Bitcoin (BTC)"),
    ("f_eth", "Ethereum (ETH)"),
    ("f_otherCrypto", "Other Crypto"),
    ("f_gpf", "GPF / Provident Fund"),
    ("f_nsc", "Sanchayapatra / NSC"),
    ("f_bonds", "Govt Bonds / Sukuk"),
    ("f_otherInvest", "Other Investment Schemes"),
]

BUSINESS_FIELDS: List[tuple[str, str]] = [
    ("f_bizCash", "Business Cash (in hand)"),
    ("f_bizBank", "Business Bank Balance"),
    ("f_pettyCash", "Petty Cash / Float"),
    ("f_finishedGoods", "Finished Goods"),
    ("f_rawMaterials", "Raw Materials"),
    ("f_wip", "Work in Progress (WIP)"),
    ("f_tradeGoods", "Trade Goods / Merchandise"),
    ("f_tradeRec", "Trade Receivables"),
    ("f_advancePaid", "Advances Paid to Suppliers"),
    ("f_secDeposit", "Security Deposits Given"),
]

LIABILITY_FIELDS: List[tuple[str, str]] = [
    ("f_personalLoan", "Personal Loans Due"),
    ("f_creditCard", "Credit Card Balance"),
    ("f_mortgage12", "Mortgage (next 12 months)"),
    ("f_rentBills", "Overdue Rent / Utilities"),
    ("f_taxesDue", "Taxes Due"),
    ("f_bizLoan", "Business Loans (12 months)"),
    ("f_tradePayables", "Trade Payables / Supplier Bills"),
    ("f_salariesPayable", "Salaries Payable"),
    ("f_advanceReceived", "Customer Advances Received"),
]


def known_fields() -> List[str]:
    groups = [LIQUID_FIELDS, SILVER_FIELDS, TRADABLE_FIELDS, OTHER_INVESTMENT_FIELDS, BUSINESS_FIELDS, LIABILITY_FIELDS]
    ids = [field_id for field_id, _, _ in GOLD_FIELDS]
    for group in groups:
        ids.extend(field_id for field_id, _ in group)
    return ids


def _parse_number(raw: object) -> float:
    if raw is None or isinstance(raw, bool):
        return 0.0
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        text = str(raw).strip().replace(",", "")
        if not text:
            return 0.0
        try:
            value = float(text)
        except ValueError:
            return 0.0
    # negative amounts are input defects like any other
    if not math.isfinite(value) or value < 0:
        return 0.0
    return value


class ValueReader:
    """Reads numeric amounts out of a mapping of raw field values."""

    def __init__(self, fields: Mapping[str, object] | None = None) -> None:
        self._fields: Dict[str, object] = dict(fields or {})

    def read(self, field_id: str) -> float:
        return _parse_number(self._fields.get(field_id))


def _load_csv(path: Path) -> Dict[str, object]:
    with path.open("r", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        if reader.fieldnames is None:
            raise ValueError("CSV has no header")
        missing = REQUIRED_COLUMNS - set(reader.fieldnames)
        if missing:
            raise ValueError(f"CSV missing columns: {', '.join(sorted(missing))}")
        fields: Dict[str, object] = {}
        for row in reader:
            field_id = (row.get("field") or "").strip()
            if field_id:
                fields[field_id] = row.get("value")
    return fields


def _load_json(path: Path) -> Dict[str, object]:
    payload = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError("JSON input must be an object of field -> value")
    return payload


def load_fields(path: Path) -> Dict[str, object]:
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")
    if path.suffix.lower() == ".json":
        return _load_json(path)
    return _load_csv(path)
