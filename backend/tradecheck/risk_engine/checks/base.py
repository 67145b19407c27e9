from __future__ import annotations

from typing import Any, Iterable

from tradecheck.risk_engine.reference_data import ReferenceData, load_reference_data
from tradecheck.risk_engine.types import RiskFinding


def unique(items: Iterable[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(item for item in items if item))


class BaseRiskCheck:
    name = ''
    label = ''
    max_points = 100
    error_penalty = 20

    def __init__(self, reference_data: ReferenceData | None = None):
        self.reference_data = reference_data or load_reference_data()

    def finding(
        self,
        *,
        status: str,
        score: int,
        details: Iterable[str] = (),
        indicators: Iterable[str] = (),
        recommendations: Iterable[str] = (),
        evidence: dict[str, Any] | None = None,
        name: str | None = None,
    ) -> RiskFinding:
        return RiskFinding(
            check_name=name or self.name,
            status=status,
            score_contribution=max(0, min(self.max_points, int(score))),
            details=tuple(details),
            indicators=unique(indicators),
            recommendations=unique(recommendations),
            evidence=evidence or {},
        )
