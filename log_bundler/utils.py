"""Utility functions for loading bundle declaration documents.

This module provides functions for loading declaration JSON from files
and standard input with proper error handling and validation.
"""

import json
import sys
from pathlib import Path
from typing import Any, Iterable, List, TextIO

from .codegen.core.errors import DeclarationError
from .codegen.core.schema import BundleDeclaration, bundles_from_document
from .logging_config import get_logger

logger = get_logger(__name__)


class JSONLoaderError(Exception):
    """Custom exception for JSON loading errors."""

    pass


def load_json_from_file(file_path: str | Path) -> Any:
    """Load JSON data from a local file.

    Args:
        file_path: Path to the JSON file.

    Returns:
        Parsed JSON data.

    Raises:
        FileNotFoundError: If file doesn't exist.
        JSONLoaderError: If file cannot be read or JSON is invalid.
    """
    file_path = Path(file_path)
    logger.debug("Attempting to load JSON from file: %s", file_path)

    if not file_path.exists():
        logger.error("File not found: %s", file_path)
        raise FileNotFoundError(f"File not found: {file_path}")

    if file_path.suffix.lower() != ".json":
        logger.warning("File does not have .json extension: %s", file_path)
        # Don't raise, just warn - might still be valid JSON

    try:
        with file_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        logger.info("Loaded declarations from %s", file_path)
        return data
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON in file %s: %s", file_path, e)
        raise JSONLoaderError(f"Invalid JSON in file {file_path}: {e}") from e
    except OSError as e:
        logger.error("Error reading file %s: %s", file_path, e)
        raise JSONLoaderError(f"Error reading file {file_path}: {e}") from e


def load_json_from_stream(stream: TextIO = None) -> Any:
    """Load JSON data from a text stream (standard input by default)."""
    stream = stream or sys.stdin
    try:
        return json.load(stream)
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON on input stream: %s", e)
        raise JSONLoaderError(f"Invalid JSON on input stream: {e}") from e


def load_declarations(file_paths: Iterable[str | Path]) -> List[BundleDeclaration]:
    """Load and convert declaration documents, preserving file order.

    Args:
        file_paths: Declaration JSON files, in discovery order.

    Returns:
        Bundles from every file, in file order then document order.

    Raises:
        JSONLoaderError: If a file cannot be loaded or modelled.
        FileNotFoundError: If a file doesn't exist.
    """
    bundles: List[BundleDeclaration] = []
    for file_path in file_paths:
        data = load_json_from_file(file_path)
        try:
            bundles.extend(bundles_from_document(data))
        except DeclarationError as e:
            raise JSONLoaderError(f"{file_path}: {e}") from e
    return bundles
