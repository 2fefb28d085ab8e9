"""DevFocus - time tracking and gamified progress for developer work."""

__version__ = "0.1.0"
