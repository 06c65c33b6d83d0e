"""Tests for ReportCoordinator."""

import asyncio
import gc
import json

import pytest
import pytest_asyncio

from tests.conftest import RecordingRenderer, make_session
from wave_results.results.paths import compute_comparison_key
from wave_results.results.results_manager import ResultsManager

FIREFOX_UA = "Mozilla/5.0 (X11; Linux x86_64; rv:121.0) Gecko/20100101 Firefox/121.0"


class TestSaveApiResults:
    """Single-session bundle layout."""

    @pytest.mark.asyncio
    async def test_layout_and_info_file(self, manager, sessions, store, results_root):
        await sessions.add_session(make_session())
        await store.create_result("abc123", {"test": "foo/a.html", "status": "OK"})

        await manager.reports.save_api_results("abc123", "foo")

        info = json.loads((results_root / "abc123" / "info.json").read_text())
        assert info == {
            "user_agent": make_session().user_agent,
            "path": "/foo, /bar",
            "types": ["automatic"],
        }
        bundle_file = results_root / "abc123" / "foo" / "Ch120.json"
        assert json.loads(bundle_file.read_text()) == {
            "results": [{"test": "foo/a.html", "status": "OK"}]
        }
        # Stable two-space indentation
        assert bundle_file.read_text().startswith('{\n  "results"')

    @pytest.mark.asyncio
    async def test_info_file_written_once(self, manager, sessions, results_root):
        await sessions.add_session(make_session())
        await manager.reports.save_api_results("abc123", "foo")

        session = await sessions.get_session("abc123")
        session.user_agent = FIREFOX_UA
        await sessions.update_session(session)
        await manager.reports.save_api_results("abc123", "bar")

        info = json.loads((results_root / "abc123" / "info.json").read_text())
        assert info["user_agent"] == make_session().user_agent

    @pytest.mark.asyncio
    async def test_generate_api_report(self, manager, sessions, renderer, results_root):
        await sessions.add_session(make_session())

        await manager.reports.generate_api_report("abc123", "foo")

        assert renderer.single_calls == [
            {
                "input_dir": results_root / "abc123" / "foo",
                "output_dir": results_root / "abc123" / "foo",
                "spec_name": "foo",
            }
        ]


class TestComparisonReport:
    """Multi-session comparison reports."""

    @pytest_asyncio.fixture
    async def two_sessions(self, sessions):
        await sessions.add_session(make_session(token="a"))
        await sessions.add_session(make_session(token="b", user_agent=FIREFOX_UA))
        await sessions.add_session(make_session(token="r"))

    @pytest.mark.asyncio
    async def test_report_path_and_call(self, manager, renderer, results_root, two_sessions):
        report = await manager.get_html_path("foo", tokens=["b", "a"])

        key = compute_comparison_key(["a", "b"])
        assert report == f"{key}/foo/all.html"
        assert (results_root / key / "foo" / "all.html").exists()

        call = renderer.multi_calls[0]
        assert call["spec_name"] == "foo"
        assert call["reference_dir"] is None
        assert [(loc.token, loc.filename) for loc in call["result_locations"]] == [
            ("b", "FF121.json"),
            ("a", "Ch120.json"),
        ]

    @pytest.mark.asyncio
    async def test_filtered_report(self, manager, renderer, results_root, two_sessions):
        report = await manager.get_html_path("foo", tokens=["a", "b"], reference_token="r")

        key = compute_comparison_key(["a", "b"], "r")
        assert report == f"{key}/foo/all_filtered.html"
        assert renderer.multi_calls[0]["reference_dir"] == results_root / "r" / "foo"

    @pytest.mark.asyncio
    async def test_same_directory_for_permutations(self, manager, two_sessions):
        first = await manager.get_html_path("foo", tokens=["b", "a"], reference_token="r")
        second = await manager.get_html_path("foo", tokens=["a", "b"], reference_token="r")
        unfiltered = await manager.get_html_path("foo", tokens=["a", "b"])

        assert first == second
        assert first.split("/")[0] != unfiltered.split("/")[0]

    @pytest.mark.asyncio
    async def test_regeneration_replaces_directory(self, manager, results_root, two_sessions):
        report = await manager.get_html_path("foo", tokens=["a", "b"])
        api_dir = results_root / report.split("/")[0] / "foo"
        (api_dir / "stale.txt").write_text("old")

        await manager.get_html_path("foo", tokens=["a", "b"])

        assert not (api_dir / "stale.txt").exists()
        assert (api_dir / "all.html").exists()

    @pytest.mark.asyncio
    async def test_failure_leaves_api_directory_absent(self, results_root, sessions, store, two_sessions):
        manager = ResultsManager(results_root, sessions, store, RecordingRenderer(fail=True))
        key = compute_comparison_key(["a", "b"])
        api_dir = results_root / key / "foo"
        api_dir.mkdir(parents=True)
        (api_dir / "all.html").write_text("previous")

        with pytest.raises(OSError):
            await manager.get_html_path("foo", tokens=["a", "b"])

        assert not api_dir.exists()
        assert list((results_root / key).iterdir()) == []

    @pytest.mark.asyncio
    async def test_comparison_locks_released(self, manager, two_sessions):
        await asyncio.gather(
            manager.get_html_path("foo", tokens=["a", "b"]),
            manager.get_html_path("foo", tokens=["b", "a"]),
            manager.get_html_path("foo", tokens=["a", "b"], reference_token="r"),
        )
        gc.collect()

        assert len(manager.reports._comparison_locks) == 0

    @pytest.mark.asyncio
    async def test_single_token_path(self, manager):
        assert await manager.get_html_path("foo", token="abc") == "abc/foo/all.html"


class TestTokensFromComparisonKey:
    """Recovering tokens from a comparison directory."""

    def test_missing_directory(self, manager):
        assert manager.get_tokens_from_hash("deadbeef") == []

    def test_lists_tokens(self, manager, results_root):
        api_dir = results_root / "somekey" / "foo"
        api_dir.mkdir(parents=True)
        (api_dir / "tok-1-Ch120.json").write_text("{}")
        (api_dir / "tok2-FF121.json").write_text("{}")
        (api_dir / "all.html").write_text("")

        assert manager.get_tokens_from_hash("somekey") == ["tok-1", "tok2"]
