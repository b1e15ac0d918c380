"""Utility helpers for task tracker."""

from task_tracker.utils.logger import setup_logger

__all__ = ["setup_logger"]
