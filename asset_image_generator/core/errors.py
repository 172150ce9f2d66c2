"""Exceptions raised by the asset image generator."""

from __future__ import annotations


class AssetGeneratorError(Exception):
    """Base class for failures that abort a generation run."""


class ConfigurationError(AssetGeneratorError):
    """pubspec.yaml is missing, unreadable or malformed, or an option is invalid."""


class GenerationError(AssetGeneratorError):
    """Rendered output is inconsistent (e.g. two units share a file name)."""


class IdentifierCollisionError(GenerationError):
    def __init__(self, group_key: str, identifier: str, paths: tuple[str, ...]):
        self.group_key = group_key
        self.identifier = identifier
        self.paths = paths
        joined = ", ".join(paths)
        super().__init__(f"Identifier '{identifier}' is used more than once in group '{group_key}': {joined}")


class WriteFailure(AssetGeneratorError):
    """The output directory could not be created or a file could not be written."""
