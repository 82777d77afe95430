"""IPC messages and transport, bar command handling and launcher state for a desktop status bar."""

__version__ = "0.16.1"