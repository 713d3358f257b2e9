from __future__ import annotations

import logging
from typing import Any, Callable

import requests
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

from holder_leaderboard.records import SwapRecord, TransferRecord
from holder_leaderboard.utils.io import extract_records

logger = logging.getLogger(__name__)


def _should_retry(exc: BaseException) -> bool:
    if isinstance(exc, requests.HTTPError):
        if exc.response is None:
            return True
        status = exc.response.status_code
        return status >= 500 or status == 429
    return isinstance(exc, (requests.Timeout, requests.ConnectionError))


class IndexerClient:
    """Reads the full transfer and swap record sets from the event indexer."""

    def __init__(
        self,
        base_url: str,
        timeout_s: int = 15,
        page_size: int = 1000,
        retry_max: int = 3,
        backoff_s: float = 1.0,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = (timeout_s, timeout_s)
        self.page_size = page_size
        self._get_json = retry(
            stop=stop_after_attempt(retry_max + 1),
            wait=wait_exponential_jitter(initial=backoff_s, max=10, jitter=backoff_s),
            retry=retry_if_exception(_should_retry),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )(self._request_json)

    def _request_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        url = f"{self.base_url}{path}"
        response = self.session.get(url, params=params, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def fetch_transfers(self) -> list[TransferRecord]:
        return self._fetch_all("/transfers", TransferRecord.from_row)

    def fetch_swaps(self) -> list[SwapRecord]:
        return self._fetch_all("/swaps", SwapRecord.from_row)

    def _fetch_all(self, path: str, parse: Callable[[dict[str, Any]], Any]) -> list:
        records: list = []
        offset = 0
        while True:
            payload = self._get_json(path, params={"limit": self.page_size, "offset": offset})
            batch = extract_records(payload)
            records.extend(parse(item) for item in batch)
            if len(batch) < self.page_size:
                break
            offset += self.page_size
        logger.info("Fetched %d records from %s%s", len(records), self.base_url, path)
        return records
