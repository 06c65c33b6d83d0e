"""ResultStore - durable storage for raw result records.

The store does not enforce uniqueness per (token, test); that is the
completion tracker's job.
"""

from __future__ import annotations

import asyncio
import copy
import json
import logging
import uuid
from pathlib import Path
from typing import Any, Protocol

logger = logging.getLogger(__name__)

INTERNAL_ID_FIELD = "_id"


class ResultStore(Protocol):
    """Interface the results layer consumes."""

    async def create_result(self, token: str, result: dict[str, Any]) -> None:
        ...

    async def get_results(self, token: str) -> list[dict[str, Any]]:
        ...


class InMemoryResultStore:
    """Result store backed by a dict of lists."""

    def __init__(self) -> None:
        self._results: dict[str, list[dict[str, Any]]] = {}

    async def create_result(self, token: str, result: dict[str, Any]) -> None:
        record = copy.deepcopy(result)
        record[INTERNAL_ID_FIELD] = uuid.uuid4().hex
        self._results.setdefault(token, []).append(record)

    async def get_results(self, token: str) -> list[dict[str, Any]]:
        return copy.deepcopy(self._results.get(token, []))


class JsonlResultStore:
    """
    JSONL-based persistence for result records.

    One file per session: {base_dir}/{token}.jsonl
    Append-only. Each line is one result record tagged with an internal id.
    """

    def __init__(self, base_dir: Path | str):
        """
        Initialize JsonlResultStore.

        Args:
            base_dir: Directory holding one JSONL file per token
        """
        self.base_dir = Path(base_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def get_store_file(self, token: str) -> Path:
        return self.base_dir / f"{token}.jsonl"

    async def create_result(self, token: str, result: dict[str, Any]) -> None:
        """
        Append a result record. Does not check for duplicates.

        Args:
            token: Session the result belongs to
            result: Result record to persist
        """
        record = dict(result)
        record[INTERNAL_ID_FIELD] = uuid.uuid4().hex
        await asyncio.to_thread(self._append_record, self.get_store_file(token), record)

    async def get_results(self, token: str) -> list[dict[str, Any]]:
        """
        All records for a token in insertion order.

        Lines that do not parse (e.g. a write cut short by a crash) are
        logged and skipped.

        Returns:
            List of records, empty if the token has none
        """
        return await asyncio.to_thread(self._read_records, self.get_store_file(token))

    @staticmethod
    def _append_record(store_file: Path, record: dict[str, Any]) -> None:
        with open(store_file, "a", encoding="utf-8") as f:
            f.write(json.dumps(record) + "\n")

    @staticmethod
    def _read_records(store_file: Path) -> list[dict[str, Any]]:
        if not store_file.exists():
            return []

        records = []
        with open(store_file, encoding="utf-8") as f:
            for line_number, line in enumerate(f, start=1):
                if not line.strip():
                    continue
                try:
                    records.append(json.loads(line))
                except json.JSONDecodeError as e:
                    logger.warning(f"Skipping unreadable line {line_number} in {store_file}: {e}")

        return records


__all__ = [
    "INTERNAL_ID_FIELD",
    "ResultStore",
    "InMemoryResultStore",
    "JsonlResultStore",
]
