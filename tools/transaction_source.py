"""
Transaction history sources for goal projection
Live HTTP source with a fixed fallback, chosen by the caller or from the environment
"""
import json
import logging
import os
from pathlib import Path
from typing import Optional, Protocol
import httpx
from dotenv import load_dotenv
from models.schemas import SpendingRecord

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

FALLBACK_PATH = Path(__file__).parent / "data" / "fallback_transactions.json"
DEFAULT_TIMEOUT = 15.0


class TransactionSource(Protocol):
    """Anything that can supply spending history"""

    def fetch(self) -> list[SpendingRecord]:
        ...


def parse_records(rows: list) -> list[SpendingRecord]:
    """Build spending records from JSON rows, skipping malformed ones"""
    records = []
    for row in rows:
        try:
            records.append(SpendingRecord.model_validate(row))
        except ValueError:
            # Skip malformed rows
            continue
    return records


class FallbackTransactionSource:
    """Fixed mock history used when no live data is available"""

    def __init__(self, path: Path = FALLBACK_PATH):
        with open(path) as f:
            self._records = parse_records(json.load(f))

    def fetch(self) -> list[SpendingRecord]:
        return [r.model_copy() for r in self._records]


class LiveTransactionSource:
    """
    Transaction history from an HTTP endpoint

    Expects a JSON list of {date, amount, category} objects, or an object
    with a "transactions" list. Falls back to the fallback source when the
    request fails or the payload is unusable.
    """

    def __init__(
        self,
        url: str,
        fallback: Optional[TransactionSource] = None,
        client: Optional[httpx.Client] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.url = url
        self.fallback = fallback
        self.client = client or httpx.Client(timeout=timeout)

    def fetch(self) -> list[SpendingRecord]:
        try:
            response = self.client.get(self.url)
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Transaction API request failed, using fallback data: %s", e)
            return self._fallback()

        rows = payload.get("transactions") if isinstance(payload, dict) else payload
        if not isinstance(rows, list):
            logger.warning("Unexpected transaction payload from %s, using fallback data", self.url)
            return self._fallback()

        records = parse_records(rows)
        if rows and not records:
            logger.warning("No usable rows in %d from %s, using fallback data", len(rows), self.url)
            return self._fallback()

        return records

    def _fallback(self) -> list[SpendingRecord]:
        if self.fallback is None:
            return []
        return self.fallback.fetch()

    def close(self):
        """Close HTTP client"""
        self.client.close()


def get_transaction_source() -> TransactionSource:
    """Live source when PENNYWISE_TRANSACTIONS_URL is set, fixed data otherwise"""
    url = os.getenv("PENNYWISE_TRANSACTIONS_URL")
    if not url:
        return FallbackTransactionSource()

    timeout = float(os.getenv("PENNYWISE_HTTP_TIMEOUT", DEFAULT_TIMEOUT))
    return LiveTransactionSource(url, fallback=FallbackTransactionSource(), timeout=timeout)
