"""Shared fixtures for wave-results tests."""

from pathlib import Path

import pytest

from wave_results.results.results_manager import ResultsManager
from wave_results.results.result_store import InMemoryResultStore
from wave_results.session.session_registry import InMemorySessionRegistry
from wave_results.session.session_schema import Session, SessionStatus

CHROME_UA = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class RecordingRenderer:
    """Renderer double that records calls and writes a placeholder report."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.single_calls: list[dict] = []
        self.multi_calls: list[dict] = []

    async def generate_report(self, input_dir: Path, output_dir: Path, spec_name: str) -> None:
        self.single_calls.append(
            {"input_dir": input_dir, "output_dir": output_dir, "spec_name": spec_name}
        )

    async def generate_multi_report(self, output_dir, spec_name, result_locations, reference_dir=None):
        self.multi_calls.append(
            {
                "output_dir": output_dir,
                "spec_name": spec_name,
                "result_locations": list(result_locations),
                "reference_dir": reference_dir,
            }
        )
        (output_dir / "all.html").write_text("<html></html>")
        if self.fail:
            raise OSError("disk full")


@pytest.fixture
def results_root(tmp_path):
    return tmp_path / "results"


@pytest.fixture
def sessions():
    return InMemorySessionRegistry()


@pytest.fixture
def store():
    return InMemoryResultStore()


@pytest.fixture
def renderer():
    return RecordingRenderer()


@pytest.fixture
def manager(results_root, sessions, store, renderer):
    return ResultsManager(results_root, sessions, store, renderer)


def make_session(token="abc123", tests=None, user_agent=CHROME_UA, **kwargs) -> Session:
    """Helper to create a running Session for testing."""
    return Session(
        token=token,
        user_agent=user_agent,
        path="/foo, /bar",
        types=["automatic"],
        status=SessionStatus.RUNNING,
        tests=tests if tests is not None else ["foo/a.html", "foo/b.html"],
        **kwargs,
    )


def harness_result(status=0, subtests=None) -> dict:
    """Helper to build a raw testharness result."""
    return {
        "status": status,
        "message": None,
        "stack": "at line 1",
        "tests": subtests if subtests is not None else [
            {"name": "subtest", "status": 0, "message": None, "stack": "trace"}
        ],
    }
