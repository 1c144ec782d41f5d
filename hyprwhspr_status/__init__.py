"""Status and history publication for the hyprwhspr dictation daemon."""

__version__ = "0.1.0"
