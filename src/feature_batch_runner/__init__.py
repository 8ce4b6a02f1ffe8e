"""Parallel batch runner for behavior-driven feature suites."""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())
