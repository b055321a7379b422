# worker/app/telemetry.py
from __future__ import annotations

import json
import threading
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

import logging

from worker.app.config import settings

log = logging.getLogger(__name__)

COUNTERS = ("sample_total", "sample_failed", "validation_failed", "parse_failed")


class Telemetry:
    """
    Thread-safe telemetry for the sampler worker.

    Keeps in-memory counters and appends structured JSON lines to
    <LOG_DIR>/worker.jsonl. Failures are logged and swallowed so telemetry
    never breaks a request.
    """

    def __init__(self, log_dir: str | Path | None = None, max_log_mb: int | None = None):
        self._lock = threading.Lock()
        self._uptime_start = time.time()
        self._counts: Dict[str, int] = {name: 0 for name in COUNTERS}
        self._last_error: Optional[str] = None

        self._log_dir = Path(log_dir if log_dir is not None else settings.LOG_DIR)
        self._log_file = self._log_dir / "worker.jsonl"
        mb = max_log_mb if max_log_mb is not None else settings.MAX_LOG_MB
        self._max_log_bytes = int(mb) * 1024 * 1024

    @property
    def log_file(self) -> Path:
        return self._log_file

    def increment(self, counter_name: str) -> None:
        with self._lock:
            if counter_name in self._counts:
                self._counts[counter_name] += 1
            else:
                log.debug(f"Unknown telemetry counter: {counter_name}")

    def set_error(self, error: str) -> None:
        with self._lock:
            self._last_error = str(error)

    def log_json(self, event: str, level: str = "info", **fields: Any) -> None:
        """
        Append one JSON line: ts, level, subsystem="worker", event, plus fields.
        """
        entry = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": level,
            "subsystem": "worker",
            "event": event,
            **fields,
        }
        try:
            self._log_dir.mkdir(parents=True, exist_ok=True)
            self._maybe_rotate_log()
            with self._lock:
                with open(self._log_file, "a", encoding="utf-8") as f:
                    f.write(json.dumps(entry, ensure_ascii=False) + "\n")
        except OSError as e:
            log.warning(f"Telemetry log_json failed: {e}")

    def _maybe_rotate_log(self) -> None:
        """Rotate log file if it exceeds size limit (2-deep: .1, .2)."""
        if not self._log_file.exists():
            return
        if self._log_file.stat().st_size <= self._max_log_bytes:
            return
        log_file_2 = self._log_file.with_suffix(".jsonl.2")
        log_file_1 = self._log_file.with_suffix(".jsonl.1")
        if log_file_2.exists():
            log_file_2.unlink()
        if log_file_1.exists():
            log_file_1.rename(log_file_2)
        self._log_file.rename(log_file_1)

    def get_stats(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "uptime_s": int(time.time() - self._uptime_start),
                **self._counts,
                "last_error": self._last_error,
            }


# Singleton instance
telemetry = Telemetry()
