from __future__ import annotations

import asyncio
import logging
from datetime import datetime, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import httpx
from tzlocal import get_localzone_name

from .. import config
from ..models import DateInfo

logger = logging.getLogger(__name__)


def system_timezone_name() -> str:
    try:
        return get_localzone_name() or "UTC"
    except (LookupError, OSError, ValueError) as exc:
        logger.warning("Could not determine the system timezone (%s), using UTC", exc)
        return "UTC"


def resolve_timezone(name: Optional[str]) -> tuple[str, tzinfo]:
    """Explicit zone, then ZAKAH_TIMEZONE, then the system zone."""
    candidate = (name or config.DEFAULT_TIMEZONE or system_timezone_name()).strip() or "UTC"
    try:
        return candidate, ZoneInfo(candidate)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone %r, using UTC", candidate)
        return "UTC", ZoneInfo("UTC")


def format_date(dt: datetime, tz_name: str) -> DateInfo:
    abbr = dt.tzname() or tz_name
    display = f"{dt:%A}, {dt.day} {dt:%B %Y} ({abbr})"
    return DateInfo(display=display, iso=dt.strftime("%Y-%m-%d"))


def _parse_remote(payload: dict, tz: tzinfo) -> datetime:
    raw = str(payload["dateTime"])
    # timeapi.io sends local wall time with up to seven fractional digits
    return datetime.fromisoformat(raw[:19]).replace(tzinfo=tz)


async def _fetch_remote(client: httpx.AsyncClient, tz_name: str, tz: tzinfo) -> datetime:
    response = await client.get(config.DATE_API_URL, params={"timeZone": tz_name})
    response.raise_for_status()
    return _parse_remote(response.json(), tz)


async def resolve_report_date(
    timezone: Optional[str] = None,
    client: Optional[httpx.AsyncClient] = None,
    timeout: float = config.DATE_API_TIMEOUT,
) -> DateInfo:
    """Current date in the report timezone; falls back to the local clock."""
    tz_name, tz = resolve_timezone(timezone)
    try:
        if client is not None:
            dt = await asyncio.wait_for(_fetch_remote(client, tz_name, tz), timeout)
        else:
            async with httpx.AsyncClient(timeout=timeout) as own_client:
                dt = await asyncio.wait_for(_fetch_remote(own_client, tz_name, tz), timeout)
        logger.info("Report date from time service: %s", dt.isoformat())
    except (httpx.HTTPError, asyncio.TimeoutError, KeyError, TypeError, ValueError) as exc:
        logger.warning("Time service unavailable (%s), using local clock", exc)
        dt = datetime.now(tz)
    return format_date(dt, tz_name)
