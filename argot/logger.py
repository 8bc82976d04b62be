# Argot CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global logger instance for Argot CLI applications."""
import logging

logger: logging.Logger = logging.getLogger("argot")
