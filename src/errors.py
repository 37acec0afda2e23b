"""Errors raised while reading the export or writing the analysis."""
from pathlib import Path


class AnalysisError(RuntimeError):
    """Fatal failure of one stage of an analysis run."""

    stage = "analysis"

    def __init__(self, path: Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.stage} failed for {self.path.name}: {reason}")


class SourceReadError(AnalysisError):
    """An input file is missing, unreadable, or not valid UTF-8."""

    stage = "read"


class SourceParseError(AnalysisError):
    """An input file is not well-formed XML or has an unexpected root element."""

    stage = "parse"


class OutputWriteError(AnalysisError):
    """The mapping directory or the results file could not be written."""

    stage = "write"
