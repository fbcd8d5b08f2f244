"""
Structured logging for aspect storage operations.
Dual-read mismatches and envelope parse failures get dedicated helpers.
"""

import logging
import os
from typing import Any, Dict

# Uniform template for dual-read mismatches: method name, reason, old value, new value.
DIFFERENT_RESULTS_TEMPLATE = (
    "The results of %s from the new schema table and old schema table are not equal. Reason: %s. "
    "Defaulting to using the value(s) from the old schema table.\nOld schema results: %s\nNew schema results: %s"
)


class StructuredLogger:
    """Structured logger for aspect decoding and schema migration checks."""

    def __init__(self, name: str = "aspect_store"):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO))

        # Create handler if not already set
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def log_operation(self, operation: str, status: str, details: Dict[str, Any] = None):
        """Log a structured operation."""
        message = f"Operation: {operation}, Status: {status}"
        if details:
            message += f", Details: {details}"

        self.logger.info(message)

    def log_aspect_operation(self, operation: str, urn: str, aspect: str, status: str = "success"):
        """Log a DAO read or write of one aspect."""
        self.log_operation(f"aspect.{operation}", status, {"urn": urn, "aspect": aspect})

    def log_dual_read_mismatch(self, method_name: str, reason: str, old: Any, new: Any):
        """Log a disagreement between old and new schema reads."""
        self.logger.warning(DIFFERENT_RESULTS_TEMPLATE, method_name, reason, old, new)

    def log_envelope_failure(self, text: str, error: Exception):
        """Log a stored envelope that could not be parsed."""
        self.logger.error(f"Failed to parse string {text} as AuditedAspect. Exception: {error}")


# Global logger instance
logger = StructuredLogger()
