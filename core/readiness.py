from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

from core.validation import ValidationFinding
from utils.constants import SCORE_MAX, SCORE_PENALTY_PER_FINDING, TOP_FINDINGS_COUNT


def readiness_score(findings: Sequence[ValidationFinding]) -> int:
    """
    0-100 readiness score: 100 minus a fixed penalty per finding, clamped.

    Errors and warnings weigh the same.
    """
    score = SCORE_MAX - len(findings) * SCORE_PENALTY_PER_FINDING
    return max(0, min(SCORE_MAX, score))


def format_finding(finding: ValidationFinding) -> str:
    parts = [f"• [{finding.severity.upper()}] "]
    if finding.id:
        parts.append(f"ID: {finding.id} | ")
    if finding.field:
        parts.append(f"Field: {finding.field} | ")
    parts.append(finding.message)
    return "".join(parts)


@dataclass(frozen=True)
class ReadinessReport:
    score: int
    errors: int
    warnings: int
    top_findings: List[str] = field(default_factory=list)

    @property
    def export_ready(self) -> bool:
        """Warnings are advisory; only errors block export."""
        return self.errors == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "errors": self.errors,
            "warnings": self.warnings,
            "exportReady": self.export_ready,
            "topFindings": list(self.top_findings),
        }


def readiness_report(findings: Sequence[ValidationFinding]) -> ReadinessReport:
    errors = sum(1 for f in findings if f.is_error)
    return ReadinessReport(
        score=readiness_score(findings),
        errors=errors,
        warnings=len(findings) - errors,
        top_findings=[format_finding(f) for f in findings[:TOP_FINDINGS_COUNT]],
    )
