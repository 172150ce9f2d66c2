"""Core utilities for the asset image generator.

This package holds the pure building blocks used by the generator: naming,
scanning, rendering, writing and pubspec access.
"""

from .errors import (
    AssetGeneratorError,
    ConfigurationError,
    GenerationError,
    IdentifierCollisionError,
    WriteFailure,
)
from .models import (
    ROOT_GROUP,
    AssetGroup,
    GenerationSummary,
    ImageAsset,
    RenderedUnit,
    ScanResult,
    ScanWarning,
)
from .naming import (
    identifier_for_file,
    sanitize_base_name,
    to_identifier_case,
    to_snake_case,
    to_type_name_case,
    type_name_for_folder,
)
from .scan import SUPPORTED_EXTENSIONS, AssetScanner
from .emit import (
    INDEX_FILE_NAME,
    group_file_name,
    render_group_unit,
    render_index_unit,
)
from .output import write_units
from .pubspec import GeneratorOptions, extract_asset_paths, load_pubspec, read_options

__all__ = [
    "AssetGeneratorError",
    "ConfigurationError",
    "GenerationError",
    "IdentifierCollisionError",
    "WriteFailure",
    "ROOT_GROUP",
    "AssetGroup",
    "GenerationSummary",
    "ImageAsset",
    "RenderedUnit",
    "ScanResult",
    "ScanWarning",
    "identifier_for_file",
    "sanitize_base_name",
    "to_identifier_case",
    "to_snake_case",
    "to_type_name_case",
    "type_name_for_folder",
    "SUPPORTED_EXTENSIONS",
    "AssetScanner",
    "INDEX_FILE_NAME",
    "group_file_name",
    "render_group_unit",
    "render_index_unit",
    "write_units",
    "GeneratorOptions",
    "extract_asset_paths",
    "load_pubspec",
    "read_options",
]
