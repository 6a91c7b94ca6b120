"""Per-request trace and diagnostics.

A ReadingContext is created by the caller and threaded through one
computation. Nothing here is module-level state, so concurrent requests
never see each other's trace.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any

from app.energy.models import Diagnostic

log = logging.getLogger(__name__)


@dataclass(slots=True)
class TracePoint:
    step: str
    success: bool
    data: Any = None
    error: str | None = None
    timestamp: float = field(default_factory=time.time)


@dataclass
class ReadingContext:
    trace: list[TracePoint] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def record(self, step: str, success: bool = True, data: Any = None,
               error: BaseException | str | None = None) -> TracePoint:
        point = TracePoint(
            step=step,
            success=success,
            data=data,
            error=str(error) if error is not None else None,
        )
        self.trace.append(point)
        log.debug("trace %s %s", "ok" if success else "FAIL", step)
        return point

    def diagnose(self, kind: str, source: str, message: str = "") -> Diagnostic:
        diagnostic = Diagnostic(kind=kind, source=source, message=message)
        self.diagnostics.append(diagnostic)
        return diagnostic

    def failures(self) -> list[TracePoint]:
        return [p for p in self.trace if not p.success]

    def report(self) -> dict[str, Any]:
        failed = self.failures()
        first = failed[0] if failed else None
        return {
            "total": len(self.trace),
            "successful": len(self.trace) - len(failed),
            "failed": len(failed),
            "first_failure": (
                {"step": first.step, "error": first.error} if first is not None else None
            ),
            "steps": [p.step for p in self.trace],
        }
