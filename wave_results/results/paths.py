"""Deterministic locations for result bundles and reports.

Layout under the results root:

    {root}/{token}/info.json
    {root}/{token}/{api}/{abbrev}{version}.json
    {root}/{comparison_key}/{api}/all.html | all_filtered.html
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from ..errors import SessionNotFoundError
from ..session.session_registry import SessionRegistry
from ..user_agent import abbreviate_browser_name, parse_user_agent

REFERENCE_SEPARATOR = b","
REPORT_FILE = "all.html"
FILTERED_REPORT_FILE = "all_filtered.html"


@dataclass(frozen=True)
class BundleLocation:
    """A bundle path split into the fragments the multi-report renderer takes."""

    root: Path
    token: str
    api: str
    filename: str

    @property
    def path(self) -> Path:
        return self.root / self.token / self.api / self.filename


def compute_comparison_key(tokens: Iterable[str], reference_token: str | None = None) -> str:
    """
    Compute the directory name for a multi-session comparison.

    Tokens are sorted by plain code point order and concatenated; a
    reference token is appended after a "," separator. The SHA-1 hex digest
    of that byte sequence is the key, so any permutation of the same tokens
    gives the same key.

    The sorted tokens are joined with no separator, so token sets whose
    concatenations match collide: ["ab", "c"] and ["a", "bc"] share a key.
    Existing comparison directories depend on this layout. Session tokens
    are fixed-length in practice, which keeps real collisions out.
    """
    content = b"".join(token.encode("utf-8") for token in sorted(tokens))
    if reference_token:
        content += REFERENCE_SEPARATOR + reference_token.encode("utf-8")
    return hashlib.sha1(content).hexdigest()


def result_file_name(user_agent: str | None) -> str:
    """File name of a bundle: browser abbreviation + major version + ".json"."""
    browser = parse_user_agent(user_agent)
    return f"{abbreviate_browser_name(browser.name)}{browser.version}.json"


def report_path(directory: str, api: str, filtered: bool = False) -> str:
    """Relative path of a rendered report, as returned to callers."""
    return f"{directory}/{api}/{FILTERED_REPORT_FILE if filtered else REPORT_FILE}"


class PathResolver:
    """Resolves bundle and report locations under a results root."""

    def __init__(self, results_root: Path | str, sessions: SessionRegistry):
        self.results_root = Path(results_root)
        self.sessions = sessions

    def session_directory(self, token: str) -> Path:
        return self.results_root / token

    def api_directory(self, token: str, api: str) -> Path:
        return self.results_root / token / api

    def info_file(self, token: str) -> Path:
        return self.session_directory(token) / "info.json"

    async def _user_agent(self, token: str) -> str:
        session = await self.sessions.get_session(token)
        if session is None:
            raise SessionNotFoundError(token)
        return session.user_agent

    async def json_path(self, token: str, api: str) -> Path:
        """Full path of the bundle for (token, api)."""
        user_agent = await self._user_agent(token)
        return self.api_directory(token, api) / result_file_name(user_agent)

    async def json_location(self, token: str, api: str) -> BundleLocation:
        """Same as json_path, returned as separate fragments."""
        user_agent = await self._user_agent(token)
        return BundleLocation(
            root=self.results_root,
            token=token,
            api=api,
            filename=result_file_name(user_agent),
        )

    def comparison_directory(self, tokens: Iterable[str], reference_token: str | None = None) -> Path:
        return self.results_root / compute_comparison_key(tokens, reference_token)

    def comparison_api_directory(
        self,
        tokens: Iterable[str],
        api: str,
        reference_token: str | None = None,
    ) -> Path:
        return self.comparison_directory(tokens, reference_token) / api


__all__ = [
    "BundleLocation",
    "FILTERED_REPORT_FILE",
    "PathResolver",
    "REFERENCE_SEPARATOR",
    "REPORT_FILE",
    "compute_comparison_key",
    "report_path",
    "result_file_name",
]
