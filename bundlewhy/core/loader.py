"""Read stats artifacts from disk."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from bundlewhy.core.exceptions import StatsFileError
from bundlewhy.core.models import StatsArtifact

logger = logging.getLogger(__name__)


def load_stats(path: Path) -> StatsArtifact:
    """Load and parse a stats JSON file (generate with ``webpack --json``).

    Raises:
        StatsFileError: The file is missing, unreadable or not JSON.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise StatsFileError(f"Cannot read stats file {path}: {e}") from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise StatsFileError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict) or "chunks" not in data:
        logger.warning("No chunks in %s, nothing to analyze", path)
        return StatsArtifact()

    artifact = StatsArtifact.from_dict(data)
    logger.debug(
        "Loaded %d chunks (%d modules) from %s",
        len(artifact.chunks),
        artifact.num_modules,
        path,
    )
    return artifact
