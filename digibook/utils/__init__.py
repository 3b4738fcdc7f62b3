"""DigiBook utilities."""

from .config_loader import (
    load_book_data,
    load_book_config,
    get_available_books,
    get_settings,
    get_log_level,
)

__all__ = [
    "load_book_data",
    "load_book_config",
    "get_available_books",
    "get_settings",
    "get_log_level",
]
