"""
Book config loader utility for DigiBook.

Loads YAML book definitions from the books/ directory and reads runtime
settings from the environment (.env is loaded by the host).
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from digibook.schemas import BookConfig


# Default books directory (relative to project root)
BOOKS_DIR = Path(__file__).parent.parent.parent / "data" / "books"

DEFAULT_SETTINGS = {
    "DIGIBOOK_BOOKS_DIR": str(BOOKS_DIR),
    "DIGIBOOK_BOOK": "sample_book",
    "DIGIBOOK_LOG_LEVEL": "INFO",
}


def load_book_data(name: str, books_dir: Path | None = None) -> dict[str, Any]:
    """
    Load a raw book definition by name.

    Args:
        name: Book name without .yaml extension (e.g., "sample_book")
        books_dir: Optional custom books directory

    Returns:
        Dict containing the parsed YAML book definition

    Raises:
        FileNotFoundError: If book file doesn't exist
        yaml.YAMLError: If YAML parsing fails
    """
    dir_path = books_dir or BOOKS_DIR
    file_path = dir_path / f"{name}.yaml"

    if not file_path.exists():
        raise FileNotFoundError(f"Book definition not found: {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_book_config(name: str, books_dir: Path | None = None) -> BookConfig:
    """
    Load and validate a book definition.

    Raises:
        FileNotFoundError: If book file doesn't exist
        yaml.YAMLError: If YAML parsing fails
        pydantic.ValidationError: If the definition doesn't match BookConfig
    """
    return BookConfig.model_validate(load_book_data(name, books_dir))


def get_available_books(books_dir: Path | None = None) -> list[str]:
    """
    List all available book definitions.

    Args:
        books_dir: Optional custom books directory

    Returns:
        Sorted list of book names (without .yaml extension)
    """
    dir_path = books_dir or BOOKS_DIR
    if not dir_path.exists():
        return []
    return sorted(p.stem for p in dir_path.glob("*.yaml"))


def get_settings() -> dict[str, str]:
    """Runtime settings: environment values over defaults."""
    settings = dict(DEFAULT_SETTINGS)
    for key in DEFAULT_SETTINGS:
        value = os.environ.get(key)
        if value:
            settings[key] = value.strip()
    return settings


def get_log_level(settings: dict[str, str]) -> int:
    """Resolve DIGIBOOK_LOG_LEVEL to a logging level, INFO if unknown."""
    level = logging.getLevelName(settings.get("DIGIBOOK_LOG_LEVEL", "INFO").upper())
    return level if isinstance(level, int) else logging.INFO
