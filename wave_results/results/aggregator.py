"""Group a session's stored results by API module."""

from __future__ import annotations

from typing import Any

from ..session.session_schema import api_of
from .result_store import INTERNAL_ID_FIELD, ResultStore


class ResultAggregator:
    """Reads results for a token and buckets them per API."""

    def __init__(self, store: ResultStore):
        self.store = store

    async def aggregate(self, token: str) -> dict[str, list[dict[str, Any]]]:
        """
        Fetch every result of a session, grouped by API.

        Store order is preserved within each API. The store's internal id
        is not part of the returned records.
        """
        results_per_api: dict[str, list[dict[str, Any]]] = {}
        for result in await self.store.get_results(token):
            record = {k: v for k, v in result.items() if k != INTERNAL_ID_FIELD}
            results_per_api.setdefault(api_of(record["test"]), []).append(record)
        return results_per_api


__all__ = ["ResultAggregator"]
