"""Map testharness status codes to labels and drop debug fields."""

from __future__ import annotations

from typing import Any

HARNESS_STATUS = {
    0: "OK",
    1: "ERROR",
    2: "TIMEOUT",
    3: "NOTRUN",
}

SUBTEST_STATUS = {
    0: "PASS",
    1: "FAIL",
    2: "TIMEOUT",
    3: "NOTRUN",
}


def _map_status(status: Any, table: dict[int, str]) -> Any:
    # Already-mapped labels pass through so normalization can be reapplied.
    if isinstance(status, str) and status in table.values():
        return status
    if status is None:
        return None
    try:
        return table[status]
    except (KeyError, TypeError):
        raise ValueError(f"Unknown status code: {status!r}") from None


def normalize_result(result: dict[str, Any]) -> dict[str, Any]:
    """
    Normalize a raw testharness result.

    - harness status 0-3 -> OK / ERROR / TIMEOUT / NOTRUN
    - sub-test status 0-3 -> PASS / FAIL / TIMEOUT / NOTRUN
    - "tests" is renamed to "subtests"
    - "stack" is removed at both levels

    Returns a new dict; the input is left untouched. Applying it to an
    already normalized record returns an equal record.

    Raises:
        ValueError: If a status code is outside the known range
    """
    normalized = {k: v for k, v in result.items() if k not in ("stack", "tests")}

    subtests = result.get("tests")
    if subtests is None:
        subtests = result.get("subtests")
    if subtests is not None:
        normalized["subtests"] = [
            {
                **{k: v for k, v in subtest.items() if k != "stack"},
                "status": _map_status(subtest.get("status"), SUBTEST_STATUS),
            }
            for subtest in subtests
        ]

    if "status" in result:
        normalized["status"] = _map_status(result["status"], HARNESS_STATUS)

    return normalized


__all__ = [
    "HARNESS_STATUS",
    "SUBTEST_STATUS",
    "normalize_result",
]
