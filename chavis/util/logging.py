"""
Structured operation logging for the knowledge desk.
"""

import logging
from typing import Any, Dict


class StructuredLogger:
    """Structured logger for record store, projection and cascade operations."""

    def __init__(self, name: str = "chavis"):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.INFO)

        # Create handler if not already set
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def log_operation(self, operation: str, status: str, details: Dict[str, Any] = None, level: int = logging.INFO):
        """Log a structured operation."""
        message = f"Operation: {operation}, Status: {status}"
        if details:
            message += f", Details: {details}"

        self.logger.log(level, message)

    def log_knowledge_operation(self, operation: str, item_id: str, answer: str = None, status: str = "success"):
        """Log a record store operation."""
        details = {"id": item_id}
        if answer is not None:
            details["answer"] = answer[:50] + "..." if len(answer) > 50 else answer

        self.log_operation(f"knowledge.{operation}", status, details)

    def log_vector_operation(self, operation: str, record_id: str, details: Dict[str, Any] = None, status: str = "success"):
        """Log a vector projection operation. Non-success statuses are warnings."""
        log_details = {"record_id": record_id}
        if details:
            log_details.update(details)

        level = logging.INFO if status == "success" else logging.WARNING
        self.log_operation(f"vector.{operation}", status, log_details, level=level)

    def log_cascade_outcome(self, outcome: str, question: str, details: Dict[str, Any] = None):
        """Log the terminal state of one answering cascade."""
        log_details = {"question": question[:50] + "..." if len(question) > 50 else question}
        if details:
            log_details.update(details)

        level = logging.ERROR if outcome == "GENERATION_FAILED" else logging.INFO
        self.log_operation("cascade", outcome, log_details, level=level)

    def log_unanswered(self, question_id: str, question: str, status: str = "recorded"):
        """Log an unanswered-log write."""
        self.log_operation("unanswered.append", status, {"id": question_id, "question": question[:50]})

    # Standard logging methods for compatibility
    def info(self, message: str) -> None:
        """Log an info message."""
        self.logger.info(message)

    def warning(self, message: str) -> None:
        """Log a warning message."""
        self.logger.warning(message)

    def error(self, message: str) -> None:
        """Log an error message."""
        self.logger.error(message)

    def debug(self, message: str) -> None:
        """Log a debug message."""
        self.logger.debug(message)


# Global logger instance
logger = StructuredLogger()
