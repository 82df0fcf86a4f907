"""Pytest configuration for global logging setup."""

from run_planner.logging_config import configure_logging

configure_logging()
