"""
Report renderers.

HTML rendering is done by the external ``wptreport`` tool. This module
only prepares its input directory and runs it as a subprocess.
"""

from __future__ import annotations

import asyncio
import logging
import shutil
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, Sequence

from ..config import DEFAULT_REPORT_COMMAND
from ..errors import ReportGenerationError

if TYPE_CHECKING:
    from ..results.paths import BundleLocation

logger = logging.getLogger(__name__)


class ReportRenderer(Protocol):
    """Interface the report coordinator consumes."""

    async def generate_report(self, input_dir: Path, output_dir: Path, spec_name: str) -> None:
        ...

    async def generate_multi_report(
        self,
        output_dir: Path,
        spec_name: str,
        result_locations: Sequence["BundleLocation"],
        reference_dir: Path | None = None,
    ) -> None:
        ...


def comparison_file_name(location: "BundleLocation") -> str:
    """Name a bundle gets inside a comparison directory: {token}-{filename}."""
    return f"{location.token}-{location.filename}"


class WptReportRenderer:
    """
    Runs the wptreport command line tool.

    Single-session reports read and write the bundle's own directory.
    Comparison reports first copy every bundle into the output directory
    as {token}-{filename} so the tool can label columns by token.
    """

    def __init__(self, command: Sequence[str] | None = None):
        """
        Args:
            command: argv prefix used to invoke wptreport
        """
        self.command = list(command or DEFAULT_REPORT_COMMAND)

    async def generate_report(self, input_dir: Path, output_dir: Path, spec_name: str) -> None:
        await self._run([
            "--input", str(input_dir),
            "--output", str(output_dir),
            "--spec", spec_name,
            "--sort", "true",
            "--failures", "true",
            "--tokenFileName", "true",
        ])

    async def generate_multi_report(
        self,
        output_dir: Path,
        spec_name: str,
        result_locations: Sequence["BundleLocation"],
        reference_dir: Path | None = None,
    ) -> None:
        for location in result_locations:
            source = location.path
            if not source.exists():
                logger.warning(f"No results for {location.token}/{location.api}, leaving it out")
                continue
            await asyncio.to_thread(
                shutil.copyfile, source, output_dir / comparison_file_name(location)
            )

        args = [
            "--input", str(output_dir),
            "--output", str(output_dir),
            "--spec", spec_name,
            "--sort", "true",
            "--failures", "true",
            "--tokenFileName", "true",
            "--pass", "100",
        ]
        if reference_dir is not None:
            args += ["--ref", str(reference_dir)]
        await self._run(args)

    async def _run(self, args: list[str]) -> None:
        argv = self.command + args
        logger.debug(f"Running {' '.join(argv)}")
        try:
            process = await asyncio.create_subprocess_exec(
                *argv,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as e:
            raise ReportGenerationError(f"Report command not found: {self.command[0]}") from e

        _, stderr = await process.communicate()
        if process.returncode != 0:
            message = stderr.decode("utf-8", errors="replace").strip()
            raise ReportGenerationError(
                f"wptreport exited with status {process.returncode}",
                returncode=process.returncode,
                stderr=message,
            )


__all__ = [
    "ReportRenderer",
    "WptReportRenderer",
    "comparison_file_name",
]
