"""LKR to USD exchange rate lookup."""
import logging

import httpx

from partnersync.config import get_settings

logger = logging.getLogger(__name__)


class ExchangeRateUnavailable(Exception):
    """The rate service could not be reached or returned an unusable body."""


async def fetch_lkr_to_usd_rate() -> float:
    """Current LKR->USD rate. Raises ExchangeRateUnavailable on any failure."""
    settings = get_settings()
    try:
        async with httpx.AsyncClient(timeout=settings.exchange_rate_timeout_seconds) as client:
            response = await client.get(settings.exchange_rate_api_url)
            response.raise_for_status()
            rate = float(response.json()["rates"]["USD"])
    except (httpx.HTTPError, KeyError, TypeError, ValueError) as exc:
        logger.warning("Exchange rate API failed: %s", exc)
        raise ExchangeRateUnavailable(str(exc)) from exc
    if rate <= 0:
        raise ExchangeRateUnavailable(f"Non-positive rate {rate}")
    return rate


def convert_lkr_to_usd(amount_lkr: float, rate: float) -> float:
    return round(amount_lkr * rate, 2)
