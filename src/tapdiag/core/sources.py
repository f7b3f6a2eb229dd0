from __future__ import annotations

import fnmatch
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from tapdiag.core.helpers import get_key
from tapdiag.errors import SampleFileError, SourceNotFoundError, UnsupportedSourceError
from tapdiag.models import DIRECTORY_SOURCE, MATCH_ALL_FILTER, RecordParserKind, SourceDefinition

logger = logging.getLogger(__name__)

SAMPLE_FILE_MESSAGE = (
    "You have no files or more than one file matching this filter; "
    "this tool can only validate one log file at a time:"
)


@dataclass(frozen=True)
class ResolvedSource:
    source: SourceDefinition
    kind: RecordParserKind
    sample_file: Path


def sources_from_config(config: dict[str, Any]) -> list[SourceDefinition]:
    """Deserialize the ``Sources`` list; entries that are not objects are skipped."""
    sources = get_key(config, "Sources")
    if not isinstance(sources, list):
        return []
    return [SourceDefinition.model_validate(entry) for entry in sources if isinstance(entry, dict)]


def find_source(config: dict[str, Any], source_id: str) -> SourceDefinition | None:
    for source in sources_from_config(config):
        if source.id == source_id:
            return source
    return None


def _matches(name: str, file_name_filter: str) -> bool:
    for pattern in file_name_filter.split("|"):
        pattern = pattern.strip()
        if pattern == MATCH_ALL_FILTER:
            return True
        if pattern and fnmatch.fnmatch(name, pattern):
            return True
    return False


def list_candidate_files(directory: str, file_name_filter: str | None = None) -> list[Path]:
    """List regular files directly inside ``directory`` whose names match the filter, sorted by name."""
    file_name_filter = file_name_filter or MATCH_ALL_FILTER
    root = Path(directory)
    try:
        entries = sorted(root.iterdir())
    except OSError as e:
        raise SampleFileError(f"Cannot list directory {directory}: {e}") from e
    return [entry for entry in entries if entry.is_file() and _matches(entry.name, file_name_filter)]


def resolve_sample_file(source: SourceDefinition, log_name: str | None = None) -> Path:
    if not source.directory:
        raise SampleFileError(f"Directory is not configured for source ID: {source.id}")
    if log_name is not None:
        return Path(source.directory) / log_name

    candidates = list_candidate_files(source.directory, source.file_name_filter)
    if len(candidates) != 1:
        raise SampleFileError(SAMPLE_FILE_MESSAGE, candidates)
    return candidates[0]


def resolve_source(config: dict[str, Any], source_id: str, log_name: str | None = None) -> ResolvedSource:
    """Find the source, check it can be diagnosed, and choose its sample file.

    Raises ``SourceNotFoundError``, ``UnsupportedSourceError`` (nothing to
    validate) or ``SampleFileError``.
    """
    source = find_source(config, source_id)
    if source is None:
        raise SourceNotFoundError(source_id)

    if source.source_type != DIRECTORY_SOURCE:
        raise UnsupportedSourceError("This tool only diagnoses DirectorySource source types.")

    kind = source.parser_kind
    if kind is RecordParserKind.UNSUPPORTED:
        raise UnsupportedSourceError(
            f"No need to validate Timestamp/Regex for the Record Parser: {source.record_parser}"
        )

    sample_file = resolve_sample_file(source, log_name)
    logger.info("Validating source %s against sample file %s", source_id, sample_file)
    return ResolvedSource(source=source, kind=kind, sample_file=sample_file)
