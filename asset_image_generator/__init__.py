"""
Asset Image Generator - Dart constants for Flutter image assets

Scans the asset folders declared in a project's pubspec.yaml and writes typed
Dart constants for every image path and name, grouped by folder.

Main features:
- Recursive discovery of png, jpg, jpeg, gif, bmp, webp and svg files
- One generated class per folder plus an aggregating images.dart index
- Deterministic, diff-friendly output (sorted assets and groups)
- Configurable name constants and identifier collision handling

Usage: run ``generate-images`` (or ``python -m asset_image_generator``) from
the project root.
"""

__version__ = "0.2.0"

from .core.errors import (
    AssetGeneratorError,
    ConfigurationError,
    GenerationError,
    IdentifierCollisionError,
    WriteFailure,
)
from .core.models import GenerationSummary
from .generator import generate

__all__ = [
    "__version__",
    "AssetGeneratorError",
    "ConfigurationError",
    "GenerationError",
    "IdentifierCollisionError",
    "WriteFailure",
    "GenerationSummary",
    "generate",
]
