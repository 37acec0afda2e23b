"""Runtime settings: source/output/log directories and the API rate limit."""
import os
from pathlib import Path
from typing import Mapping, Optional

from pydantic import BaseModel, Field

BASE_DIR = Path(__file__).resolve().parent.parent

DEFAULT_SOURCE_DIR = "data/source"
SAMPLES_SOURCE_DIR = "data/source/samples"
DEFAULT_LOG_DIR = "logs"
MAPPING_DIR_NAME = "mapping"
DEFAULT_REQUESTS_PER_MINUTE = 75

SOURCE_DIR_ENV = "SOURCE_DIR"
OUTPUT_DIR_ENV = "OUTPUT_DIR"
LOG_DIR_ENV = "LOG_DIR"
REQUESTS_PER_MINUTE_ENV = "REQUESTS_PER_MINUTE"


class AnalysisSettings(BaseModel):
    """Resolved settings for one analysis run."""

    source_dir: Path = Field(..., description="Directory holding the XML exports")
    output_dir: Path = Field(..., description="Directory receiving analysis_results.json")
    log_dir: Path = Field(..., description="Directory receiving info.log and error.log")
    requests_per_minute: int = Field(
        DEFAULT_REQUESTS_PER_MINUTE, gt=0, description="API rate limit used for the time estimate"
    )


def get_source_directory(
    use_samples: bool = False,
    source_dir: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
    base_dir: Path = BASE_DIR,
) -> Path:
    """
    Resolve the directory containing tickets.xml, users.xml and organizations.xml.

    The samples directory wins, then an explicit *source_dir*, then the
    ``SOURCE_DIR`` environment variable, then ``data/source``. Relative paths
    are taken from the project root.
    """
    env = os.environ if env is None else env

    if use_samples:
        return base_dir / SAMPLES_SOURCE_DIR

    return base_dir / (source_dir or env.get(SOURCE_DIR_ENV) or DEFAULT_SOURCE_DIR)


def get_mapping_directory(source_dir: Path) -> Path:
    """The ``mapping`` directory that sits next to the source directory."""
    return source_dir.parent / MAPPING_DIR_NAME


def get_log_directory(
    log_dir: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
    base_dir: Path = BASE_DIR,
) -> Path:
    env = os.environ if env is None else env
    return base_dir / (log_dir or env.get(LOG_DIR_ENV) or DEFAULT_LOG_DIR)


def load_settings(
    use_samples: bool = False,
    source_dir: Optional[str] = None,
    output_dir: Optional[str] = None,
    log_dir: Optional[str] = None,
    requests_per_minute: Optional[int] = None,
    env: Optional[Mapping[str, str]] = None,
    base_dir: Path = BASE_DIR,
) -> AnalysisSettings:
    """
    Build AnalysisSettings from explicit values, the environment, and defaults.

    Raises:
        ValueError: If the rate limit is not a positive integer.
    """
    env = os.environ if env is None else env

    resolved_source = get_source_directory(use_samples, source_dir, env, base_dir)

    output = output_dir or env.get(OUTPUT_DIR_ENV)
    resolved_output = base_dir / output if output else get_mapping_directory(resolved_source)

    if requests_per_minute is None:
        requests_per_minute = env.get(REQUESTS_PER_MINUTE_ENV) or DEFAULT_REQUESTS_PER_MINUTE

    # pydantic's ValidationError subclasses ValueError
    return AnalysisSettings(
        source_dir=resolved_source,
        output_dir=resolved_output,
        log_dir=get_log_directory(log_dir, env, base_dir),
        requests_per_minute=requests_per_minute,
    )
