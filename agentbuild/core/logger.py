"""Line-oriented compile logger: JSON events for tooling, plain text for people."""

import json
import sys
from typing import Optional

from .types import BatchResult, CompileResult, Diagnostic


_TEXT_MARKERS = {
    "debug": "   ",
    "info": "",
    "warn": "⚠️  Warning: ",
    "error": "❌ Error: ",
}


class CompileLogger:
    """
    Emits one line per event.

    JSON mode event types:
    - "log"      → {"level", "source", "message"}
    - "compiled" → one per written output file
    - "batch"    → summary after compiling a sources directory
    """

    def __init__(self, json_logs: bool = False, verbose: bool = False):
        self.json_logs = json_logs
        self.verbose = verbose

    def _emit(self, data: dict) -> None:
        print(json.dumps(data, ensure_ascii=False), flush=True)

    def _log(self, level: str, msg: str, source: Optional[str]) -> None:
        if level == "debug" and not self.verbose:
            return
        if self.json_logs:
            self._emit({"event": "log", "level": level, "source": source, "message": msg})
            return
        stream = sys.stderr if level in ("warn", "error") else sys.stdout
        print(f"{_TEXT_MARKERS[level]}{msg}", file=stream, flush=True)

    # ── Log events ──

    def info(self, msg: str, source: Optional[str] = None) -> None:
        self._log("info", msg, source)

    def warn(self, msg: str, source: Optional[str] = None) -> None:
        self._log("warn", msg, source)

    def error(self, msg: str, source: Optional[str] = None) -> None:
        self._log("error", msg, source)

    def debug(self, msg: str, source: Optional[str] = None) -> None:
        self._log("debug", msg, source)

    # ── Include diagnostics ──

    def diagnostic(self, diag: Diagnostic, source: Optional[str] = None) -> None:
        if diag.is_error:
            self.error(diag.message, source=source)
        else:
            self.warn(diag.message, source=source)

    # ── Compile events ──

    def compile_start(self, label: str, source: str) -> None:
        if self.json_logs:
            self.debug(f"Compiling {label}", source=source)
        else:
            self.info(f"📄 Compiling {label}...")

    def report_compiled(self, result: CompileResult) -> None:
        if self.json_logs:
            self._emit({"event": "compiled", "source": result.source,
                        "output": result.output,
                        "warnings": result.warning_count,
                        "errors": result.error_count})
        else:
            self.info(f"✅ Created {result.output}")

    def report_batch(self, batch: BatchResult) -> None:
        if self.json_logs:
            self._emit({"event": "batch", "kind": batch.kind,
                        "total": batch.total, "success": len(batch.results),
                        "failed": batch.failed, "files": batch.outputs})
            return
        if batch.total == 0:
            return
        if batch.ok:
            self.info(f"\n✨ All {batch.kind} compiled successfully!\n")
        else:
            self.error(f"{len(batch.failed)}/{batch.total} {batch.kind} failed to compile")
