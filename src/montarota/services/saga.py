"""Multi-record writes with compensating actions.

The datastore offers no cross-table transaction, so operations that touch
several collections run their writes as saga steps. When a step fails, the
steps that already ran are undone in reverse order and the failure is
re-raised. Service errors keep their type; anything else surfaces as
:class:`UpstreamError`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from ..errors import MontaRotaError, UpstreamError

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SagaStep:
    name: str
    action: Callable[[], Any]
    compensation: Optional[Callable[[Any], None]] = None


@dataclass(slots=True)
class Saga:
    name: str
    steps: list[SagaStep] = field(default_factory=list)

    def step(
        self,
        name: str,
        action: Callable[[], Any],
        compensation: Optional[Callable[[Any], None]] = None,
    ) -> "Saga":
        self.steps.append(SagaStep(name, action, compensation))
        return self

    def run(self) -> list[Any]:
        """Run every step and return their results in order."""
        completed: list[tuple[SagaStep, Any]] = []
        for step in self.steps:
            try:
                result = step.action()
            except Exception as exc:
                logger.warning(f"Saga '{self.name}' failed at step '{step.name}': {exc}")
                self._compensate(completed)
                if isinstance(exc, MontaRotaError):
                    raise
                raise UpstreamError(f"{self.name} failed at '{step.name}': {exc}") from exc
            completed.append((step, result))
        return [result for _, result in completed]

    def _compensate(self, completed: list[tuple[SagaStep, Any]]) -> None:
        for step, result in reversed(completed):
            if step.compensation is None:
                continue
            try:
                step.compensation(result)
                logger.warning(f"Saga '{self.name}' compensated step '{step.name}'")
            except Exception:
                # Keep undoing the remaining steps; the record needs manual repair.
                logger.exception(f"Saga '{self.name}' could not compensate step '{step.name}'")
