"""Orchestrator for a full analysis run: load, aggregate, persist."""
import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from src.analytics.aggregation import analyze_records
from src.config import DEFAULT_REQUESTS_PER_MINUTE, get_mapping_directory
from src.errors import OutputWriteError, SourceParseError, SourceReadError
from src.ingestion.loader import load_source_records
from src.models.analysis import AnalysisResult

logger = logging.getLogger(__name__)

ANALYSIS_RESULTS_FILE = "analysis_results.json"


def write_analysis_results(result: AnalysisResult, output_dir: Path) -> Path:
    """
    Write *result* to ``output_dir/analysis_results.json``.

    The JSON goes to a temporary file first and is renamed into place, so a
    failed write never leaves a partial results file.

    Returns:
        Path of the written file.

    Raises:
        OutputWriteError: If the directory or file cannot be written.
    """
    output_path = output_dir / ANALYSIS_RESULTS_FILE
    tmp_path = output_dir / f".{ANALYSIS_RESULTS_FILE}.tmp"

    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        tmp_path.write_text(result.to_json(), encoding="utf-8")
        tmp_path.replace(output_path)
    except OSError as e:
        if tmp_path.exists():
            tmp_path.unlink()
        raise OutputWriteError(output_path, str(e)) from e

    logger.info(f"Wrote analysis results to {output_path}")
    return output_path


def load_analysis_results(path: Path) -> AnalysisResult:
    """
    Read a previously written analysis results file.

    Raises:
        SourceReadError: If the file cannot be read.
        SourceParseError: If it is not valid JSON or does not match AnalysisResult.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SourceReadError(path, str(e)) from e

    try:
        return AnalysisResult.model_validate(json.loads(text))
    except (json.JSONDecodeError, ValidationError) as e:
        raise SourceParseError(path, str(e)) from e


def analyze_data(
    source_dir: Path,
    output_dir: Optional[Path] = None,
    requests_per_minute: int = DEFAULT_REQUESTS_PER_MINUTE,
) -> AnalysisResult:
    """Analyze the XML exports in a directory and save the summary.

    1. Load tickets, users and organizations (any failure aborts the run)
    2. Aggregate the statistics and the migration time estimate
    3. Write analysis_results.json into the mapping directory

    Args:
        source_dir: Directory containing tickets.xml, users.xml, organizations.xml.
        output_dir: Destination directory. Defaults to the ``mapping``
            directory next to *source_dir*.
        requests_per_minute: API rate limit used for the estimate.

    Returns:
        The AnalysisResult that was written.
    """
    tickets, users, organizations = load_source_records(source_dir)

    result = analyze_records(tickets, users, organizations, requests_per_minute)

    write_analysis_results(result, output_dir or get_mapping_directory(source_dir))
    return result
