#!/usr/bin/env python3

"""Progress tracking for registry compilation runs."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from time import time

import psutil


class ProgressTracker:
    """
    Track and report header compilation progress.

    Provides contextual timing, per-header counters, and operation
    logging for long registry runs.
    """

    def __init__(self, logger: logging.Logger):
        """
        Initialize progress tracker.

        Args:
            logger: Logger instance for progress reporting
        """
        self.logger = logger
        self.start_time = time()
        self.header_count = 0
        self.entry_count = 0
        self.warning_count = 0
        self.operation_stack: list[tuple[str, float]] = []

    @contextmanager
    def track_operation(self, operation_name: str) -> Iterator[None]:
        """
        Track a high-level operation with timing.

        Args:
            operation_name: Name of the operation being tracked

        Yields:
            None
        """
        start_time = time()
        self.operation_stack.append((operation_name, start_time))

        self.logger.debug(f"Starting operation: {operation_name}")

        try:
            yield
            elapsed = time() - start_time
            self.logger.debug(f"Completed operation: {operation_name} in {elapsed:.3f}s")
        except Exception as e:
            elapsed = time() - start_time
            self.logger.error(f"Failed operation: {operation_name} after {elapsed:.3f}s: {e}")
            raise
        finally:
            self.operation_stack.pop()

    @contextmanager
    def track_header(self, header_name: str) -> Iterator[None]:
        """
        Track compilation of a single contract header.

        Args:
            header_name: File name of the header being compiled

        Yields:
            None
        """
        self.header_count += 1
        header_start = time()
        initial_entry_count = self.entry_count

        self.logger.debug(f"Compiling header #{self.header_count}: {header_name}")

        try:
            yield

            elapsed = time() - header_start
            entries = self.entry_count - initial_entry_count
            self.logger.debug(
                f"Header #{self.header_count} ({header_name}) compiled in {elapsed:.3f}s "
                f"({entries} entries)"
            )
        except Exception as e:
            elapsed = time() - header_start
            self.logger.error(f"Header {header_name} failed after {elapsed:.3f}s: {e}")
            raise

    def count_entries(self, count: int) -> None:
        """Add compiled entries to the running total."""
        self.entry_count += count

    def count_warnings(self, count: int) -> None:
        """Add resolution warnings to the running total."""
        self.warning_count += count

    def report_summary(self) -> None:
        """Report final processing statistics."""
        total_time = time() - self.start_time
        avg_header_time = total_time / self.header_count if self.header_count > 0 else 0

        self.logger.info(
            f"Processing complete: {self.header_count} headers, {self.entry_count} entries, "
            f"{self.warning_count} warnings in {total_time:.2f}s "
            f"(avg: {avg_header_time:.3f}s/header)"
        )

    def get_current_context(self) -> str:
        """
        Get current operation context for logging.

        Returns:
            String describing current operation stack
        """
        if not self.operation_stack:
            return "idle"

        return " > ".join(op[0] for op in self.operation_stack)

    def log_memory_usage(self) -> None:
        """Log resident memory of the current process."""
        process = psutil.Process()
        memory_mb = process.memory_info().rss / 1024 / 1024
        self.logger.debug(f"Memory usage: {memory_mb:.1f} MB")

    def reset(self) -> None:
        """Reset all counters and timers."""
        self.start_time = time()
        self.header_count = 0
        self.entry_count = 0
        self.warning_count = 0
        self.operation_stack.clear()
