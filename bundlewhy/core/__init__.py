"""
Core module: data models, exceptions, and stats loading.

Models (models.py):
    - StatsArtifact: A parsed stats document
    - Chunk: A bundler output unit with files and modules
    - Module: A compiled module with the reasons it was included
    - Reason: One importer of a module and the request it used

Exceptions (exceptions.py):
    - BundleWhyError: Base exception for all bundlewhy errors
    - StatsFileError: Stats file missing, unreadable or invalid
    - UnknownModuleError: No module matches a query
    - AmbiguousModuleError: Several modules match a unique query

Loading (loader.py):
    - load_stats(): Read a stats JSON file into a StatsArtifact
"""

from bundlewhy.core.exceptions import (
    AmbiguousModuleError,
    BundleWhyError,
    StatsFileError,
    UnknownModuleError,
)
from bundlewhy.core.loader import load_stats
from bundlewhy.core.models import Chunk, Module, Reason, StatsArtifact

__all__ = [
    # Models
    "StatsArtifact",
    "Chunk",
    "Module",
    "Reason",
    # Exceptions
    "BundleWhyError",
    "StatsFileError",
    "UnknownModuleError",
    "AmbiguousModuleError",
    # Loading
    "load_stats",
]
