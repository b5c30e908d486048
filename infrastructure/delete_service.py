"""Purge execution service.

Builds delete requests from the trash snapshot, moves files to the recycle
bin and writes an audit CSV log of every attempt.
"""

from __future__ import annotations

import csv
from datetime import datetime
import os
from pathlib import Path

from loguru import logger
from send2trash import send2trash

from core.services.interfaces import DeleteResult, PurgeRequest
from infrastructure.logging import get_delete_log_directory


class DeleteRequestError(RuntimeError):
    """Raised when a purge request cannot be turned into a delete request."""


class DeleteService:
    """Coordinates recycle-bin deletes and audit logging."""

    def __init__(self, log_dir: str | None = None) -> None:
        self._log_dir = log_dir

    def build_request(self, request: PurgeRequest) -> PurgeRequest:
        """Validate `request` and normalise its locations."""
        if not request.locations:
            raise DeleteRequestError("Delete request has no locations")
        try:
            locations = tuple(os.path.normpath(os.path.abspath(p)) for p in request.locations)
        except (TypeError, ValueError) as ex:
            raise DeleteRequestError(f"Invalid location in delete request: {ex}") from ex
        if len(set(locations)) != len(locations):
            raise DeleteRequestError("Delete request contains duplicate locations")
        return PurgeRequest(items=request.items, locations=locations)

    def delete_to_recycle(self, paths: list[str]) -> DeleteResult:
        """Send files to recycle bin and report per-path results."""
        success: list[str] = []
        failed: list[tuple[str, str]] = []
        for p in paths:
            normalized_path = os.path.normpath(p)
            if not os.path.exists(normalized_path):
                logger.error("File does not exist: {}", normalized_path)
                failed.append((p, "File does not exist"))
                continue
            try:
                send2trash(normalized_path)
                success.append(p)
            except (UnicodeEncodeError, OSError) as ex:
                logger.warning("Recycle failed for {}, retrying with absolute path: {}", p, ex)
                try:
                    send2trash(os.path.abspath(p))
                    success.append(p)
                except (UnicodeEncodeError, OSError) as ex2:
                    logger.error("All delete methods failed for {}: {} / {}", p, ex, ex2)
                    failed.append((p, f"Multiple delete failures: {ex}, {ex2}"))
        return DeleteResult(success_paths=success, failed=failed)

    def execute_delete(self, request: PurgeRequest, log_dir: str | None = None) -> DeleteResult:
        """Delete every location in `request` and write an audit CSV log.

        Args:
            request: A request previously returned by `build_request`.
            log_dir: Optional directory for the audit log; defaults to the
                configured delete-log directory.
        """
        result = self.delete_to_recycle(list(request.locations))
        try:
            base_dir = os.path.expandvars(log_dir or self._log_dir or get_delete_log_directory())
            Path(base_dir).mkdir(parents=True, exist_ok=True)
            ts = datetime.now().strftime("%Y%m%d_%H%M%S")
            log_path = os.path.join(base_dir, f"delete_{ts}.csv")
            path_to_id = {loc: it.id for it, loc in zip(request.items, request.locations)}
            with open(log_path, "w", encoding="utf-8", newline="") as f:
                writer = csv.writer(f)
                writer.writerow(["PhotoId", "FilePath", "Success", "Reason"])
                for p in result.success_paths:
                    writer.writerow([path_to_id.get(p, ""), p, 1, ""])
                for p, reason in result.failed:
                    writer.writerow([path_to_id.get(p, ""), p, 0, reason])
            result.log_path = log_path
            logger.info(
                "Delete log written: {} ({} success, {} failed)",
                log_path,
                len(result.success_paths),
                len(result.failed),
            )
        except (OSError, ValueError) as ex:
            logger.error("Write delete log failed: {}", ex)
        return result
