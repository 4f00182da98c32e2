# File: crawl_check/logsource.py
"""crawl_check.logsource: Pluggable access to the server's log output.

After a crawl the run window's log lines are scanned for an error marker
(``[error]`` by default, the Apache/PHP convention). Where the lines come
from is up to a :class:`LogSource`:

* :class:`DockerLogSource` – ``docker logs <container> --since … --until …``
* :class:`CommandLogSource` – any command, ``{since}``/``{until}`` substituted
* :class:`NullLogSource` – no log check at all

A source that cannot be read never aborts the run. The failure shows up as a
synthetic line in the report instead.
"""
from __future__ import annotations

import re
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from crawl_check.config import CrawlConfig
from crawl_check.logger import logger

__all__ = (
    "LogOutput",
    "LogSource",
    "CommandLogSource",
    "DockerLogSource",
    "NullLogSource",
    "build_log_source",
    "scan_errors",
)


@dataclass(slots=True)
class LogOutput:
    """Lines read from a source, or the reason they could not be read."""

    lines: List[str] = field(default_factory=list)
    error: Optional[str] = None


class LogSource(ABC):
    """Something that can return the log lines of a time window."""

    @abstractmethod
    def read(self, since: str, until: str) -> LogOutput:
        """Return lines written between the ISO-8601 timestamps *since* and *until*."""


class NullLogSource(LogSource):
    def read(self, since: str, until: str) -> LogOutput:
        return LogOutput()

    def __repr__(self) -> str:
        return "NullLogSource()"


class CommandLogSource(LogSource):
    """Runs an external command and splits its output into lines."""

    #: also read stderr when the command succeeds
    merge_stderr = False

    def __init__(self, argv: Sequence[str], timeout: float = 30.0) -> None:
        if not argv:
            raise ValueError("empty log command")
        self.argv = list(argv)
        self.timeout = timeout

    def command(self, since: str, until: str) -> List[str]:
        return [arg.replace("{since}", since).replace("{until}", until) for arg in self.argv]

    def read(self, since: str, until: str) -> LogOutput:
        cmd = self.command(since, until)
        logger.debug("Reading logs: %s", " ".join(cmd))
        try:
            proc = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
                check=False,
            )
        except (OSError, subprocess.SubprocessError) as exc:
            return LogOutput(error=f"log-exec-error: {exc}")

        if proc.returncode != 0:
            reason = proc.stderr.strip() or f"{cmd[0]} exited with status {proc.returncode}"
            return LogOutput(error=f"log-error: {reason}")

        text = proc.stdout or ""
        if self.merge_stderr and proc.stderr:
            text = text + "\n" + proc.stderr
        return LogOutput(lines=text.splitlines())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.argv!r})"


class DockerLogSource(CommandLogSource):
    """``docker logs`` of one container; container stderr arrives on our stderr."""

    merge_stderr = True

    def __init__(self, container: str, timeout: float = 30.0, docker: str = "docker") -> None:
        super().__init__([docker, "logs", container, "--since", "{since}", "--until", "{until}"], timeout)
        self.container = container


def build_log_source(config: CrawlConfig) -> LogSource:
    if config.log_source == "docker":
        return DockerLogSource(config.log_container, timeout=config.log_timeout)
    if config.log_source == "command":
        return CommandLogSource(config.log_command, timeout=config.log_timeout)
    return NullLogSource()


def scan_errors(source: LogSource, since: str, until: str, marker: str = r"\[error\]") -> List[str]:
    """Lines of the window that match *marker* (case-insensitive).

    A source failure yields a single synthetic line describing it.
    """
    output = source.read(since, until)
    if output.error is not None:
        logger.warning("Log source %r failed: %s", source, output.error)
        return [output.error]
    pattern = re.compile(marker, re.IGNORECASE)
    hits = [line for line in output.lines if pattern.search(line)]
    logger.info("Log check: %d lines, %d matching %s", len(output.lines), len(hits), marker)
    return hits
