"""DigiBook - navigation and progress tracking for interactive multi-chapter books."""

__version__ = "0.1.0"
