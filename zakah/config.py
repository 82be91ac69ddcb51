from __future__ import annotations

import json
import os
from pathlib import Path


BASE_DIR = Path(__file__).resolve().parent
OUT_DIR = Path.cwd() / "out"
STYLE_PRESET_PATH = BASE_DIR / "assets" / "report_style.json"

BRAND_NAME = "Samin's Initiatives"
REPORT_TAG = "Zakah Assessment Report  |  1430H Method"
PAGE_HEADER_TEXT = "ZAKAH CALCULATOR  |  Samin's Initiatives"
FOOTER_TEXT = "Samin's Initiatives  |  Zakah Calculator  |  100% Local Processing — No Data Shared"
DISCLAIMER_TEXT = (
    "This report is generated for estimation purposes only. Metal prices and exchange rates are sourced "
    "from third-party providers and may not reflect exact market values. Please consult a qualified Islamic "
    "scholar for authoritative Zakah rulings. Samin's Initiatives does not warrant the accuracy of this report."
)

DATE_API_URL = "https://timeapi.io/api/time/current/zone"
DATE_API_TIMEOUT = 5.0
DEFAULT_TIMEZONE = os.getenv("ZAKAH_TIMEZONE")
DEFAULT_CURRENCY = "BDT"

# Nisab thresholds in grams
SILVER_NISAB_GRAMS = 612.36
GOLD_NISAB_GRAMS = 87.48

LUNAR_RATE = 0.025
SOLAR_RATE = 0.02577
LONG_TERM_PROXY = 0.25


def load_style_preset() -> dict:
    with STYLE_PRESET_PATH.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def set_out_dir(path: Path) -> None:
    global OUT_DIR
    OUT_DIR = path
