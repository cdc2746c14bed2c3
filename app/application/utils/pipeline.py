from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable


@dataclass(frozen=True)
class Step:
    name: str
    action: Callable[[], Any]
    required: bool = False


@dataclass(frozen=True)
class StepResult:
    name: str
    ok: bool
    error: str | None = None


class StepPipeline:
    """
    Ordered steps with per-step failure isolation.

    A failing best-effort step is logged and the pipeline moves on; a failing
    required step is logged and re-raised, so later steps never run.
    """

    def __init__(self, name: str, context: dict[str, Any] | None = None) -> None:
        self._name = name
        self._context = dict(context or {})
        self._steps: list[Step] = []
        self._logger = logging.getLogger(__name__)

    @property
    def step_names(self) -> list[str]:
        return [step.name for step in self._steps]

    def add(self, name: str, action: Callable[[], Any], required: bool = False) -> "StepPipeline":
        self._steps.append(Step(name=name, action=action, required=required))
        return self

    def run(self) -> list[StepResult]:
        results: list[StepResult] = []
        for step in self._steps:
            try:
                step.action()
            except Exception as e:
                extra = {**self._context, "step": step.name, "error": str(e)}
                if step.required:
                    self._logger.error("Required step failed in %s", self._name, extra=extra)
                    raise
                self._logger.error("Best-effort step failed in %s", self._name, extra=extra)
                results.append(StepResult(name=step.name, ok=False, error=str(e)))
                continue
            results.append(StepResult(name=step.name, ok=True))
        return results
