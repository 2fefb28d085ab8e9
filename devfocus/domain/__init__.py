"""Domain layer for DevFocus.

Pure models and functions for tasks, time sessions, categories,
scoring and metrics. Nothing in this package performs I/O.
"""
