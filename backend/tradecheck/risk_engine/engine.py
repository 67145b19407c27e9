from __future__ import annotations

from dataclasses import dataclass
import logging
from types import MappingProxyType
import uuid

from django.conf import settings
from django.utils import timezone

from tradecheck.models import CreditRating, FraudStatus, SanctionsStatus
from tradecheck.risk_engine.checks import CHECK_CLASSES, DocumentIntegrityChecker, FraudDetector, RiskAssessor, SanctionsScreener
from tradecheck.risk_engine.checks.base import unique
from tradecheck.risk_engine.concurrency import run_all
from tradecheck.risk_engine.reference_data import ReferenceData, load_reference_data
from tradecheck.risk_engine.types import CHECK_ORDER, CheckFailure, RiskFinding, VerificationRequest, VerificationResult

logger = logging.getLogger(__name__)

RATING_THRESHOLDS = (
    (15, CreditRating.AAA),
    (25, CreditRating.AA),
    (40, CreditRating.A),
    (55, CreditRating.BBB),
    (70, CreditRating.BB),
    (85, CreditRating.B),
)

MANUAL_REVIEW_RECOMMENDATION = 'Manual compliance review required before funding'


def clamp_score(value: int) -> int:
    return max(0, min(100, int(value)))


def credit_rating_from_score(score: int) -> str:
    for ceiling, rating in RATING_THRESHOLDS:
        if score <= ceiling:
            return rating
    return CreditRating.D


@dataclass(frozen=True)
class EngineConfig:
    base_risk: int = 5
    validity_cutoff: int = 70
    high_match_threshold: float = 0.8
    potential_match_threshold: float = 0.6
    max_workers: int = 4

    @classmethod
    def from_settings(cls) -> EngineConfig:
        return cls(
            base_risk=int(getattr(settings, 'TRADECHECK_BASE_RISK', cls.base_risk)),
            validity_cutoff=int(getattr(settings, 'TRADECHECK_VALIDITY_CUTOFF', cls.validity_cutoff)),
            high_match_threshold=float(getattr(settings, 'TRADECHECK_HIGH_MATCH_THRESHOLD', cls.high_match_threshold)),
            potential_match_threshold=float(
                getattr(settings, 'TRADECHECK_POTENTIAL_MATCH_THRESHOLD', cls.potential_match_threshold)
            ),
            max_workers=int(getattr(settings, 'TRADECHECK_MAX_WORKERS', cls.max_workers)),
        )


def error_finding(check_name: str, failure: CheckFailure | None = None) -> RiskFinding:
    check_class = CHECK_CLASSES[check_name]
    evidence = {}
    if failure is not None:
        evidence = {'error_type': failure.error_type, 'error': failure.message}
    return RiskFinding(
        check_name=check_name,
        status='ERROR',
        score_contribution=check_class.error_penalty,
        details=(f'{check_class.label} service temporarily degraded',),
        indicators=('CHECK_ERROR',),
        recommendations=('Manual review required',),
        evidence=evidence,
    )


class VerificationEngine:
    def __init__(self, reference_data: ReferenceData | None = None, config: EngineConfig | None = None):
        self.reference_data = reference_data or load_reference_data()
        self.config = config or EngineConfig.from_settings()
        self.document_checker = DocumentIntegrityChecker(self.reference_data)
        self.sanctions_screener = SanctionsScreener(
            self.reference_data,
            high_match_threshold=self.config.high_match_threshold,
            potential_match_threshold=self.config.potential_match_threshold,
        )
        self.fraud_detector = FraudDetector(self.reference_data)
        self.risk_assessor = RiskAssessor(self.reference_data)

    def verify(self, request: VerificationRequest) -> VerificationResult:
        """Run every check for one invoice and fold the findings into a result."""
        if not isinstance(request, VerificationRequest):
            raise TypeError(f'verify() expects a VerificationRequest, got {type(request).__name__}.')
        request.validate_shape()

        verification_id = str(uuid.uuid4())
        logger.info('Starting verification %s for invoice %s', verification_id, request.invoice_id)

        findings = self.collect(request)
        result = self.aggregate(verification_id, request, findings)

        logger.info(
            'Verification %s completed: valid=%s risk=%s rating=%s',
            verification_id,
            result.is_valid,
            result.risk_score,
            result.credit_rating,
        )
        return result

    def collect(self, request: VerificationRequest) -> dict[str, RiskFinding]:
        outcomes = run_all(
            {
                'document': lambda: self.document_checker.check(request.document_hash),
                'sanctions': lambda: self.sanctions_screener.screen(request),
                'fraud': lambda: self.fraud_detector.detect(request),
                'assessment': lambda: self.risk_assessor.assess(request),
            },
            max_workers=self.config.max_workers,
        )

        findings: dict[str, RiskFinding] = {}
        for task_name, check_names in (
            ('document', ('document_integrity',)),
            ('sanctions', ('sanctions_check',)),
            ('fraud', ('fraud_check',)),
            ('assessment', ('commodity_check', 'geographic_check', 'amount_check')),
        ):
            outcome = outcomes[task_name]
            if isinstance(outcome, CheckFailure):
                for check_name in check_names:
                    findings[check_name] = error_finding(check_name, outcome)
                continue

            values = outcome if isinstance(outcome, tuple) else (outcome,)
            for check_name, finding in zip(check_names, values):
                findings[check_name] = finding
        return findings

    def aggregate(
        self,
        verification_id: str,
        request: VerificationRequest,
        findings: dict[str, RiskFinding],
    ) -> VerificationResult:
        ordered = tuple(findings.get(name) or error_finding(name) for name in CHECK_ORDER)

        raw_score = self.config.base_risk + sum(item.score_contribution for item in ordered)
        risk_score = clamp_score(raw_score)
        credit_rating = credit_rating_from_score(risk_score)

        checks = {item.check_name: str(item.status) for item in ordered}
        is_valid = not (
            risk_score >= self.config.validity_cutoff
            or checks['sanctions_check'] == SanctionsStatus.FLAGGED
            or checks['fraud_check'] == FraudStatus.FAILED
        )

        details = tuple(line for item in ordered for line in item.details)
        recommendations = [line for item in ordered for line in item.recommendations]
        if not is_valid:
            recommendations.append(MANUAL_REVIEW_RECOMMENDATION)

        return VerificationResult(
            verification_id=verification_id,
            invoice_id=request.invoice_id,
            is_valid=is_valid,
            risk_score=risk_score,
            credit_rating=str(credit_rating),
            checks=MappingProxyType(checks),
            details=details,
            recommendations=unique(recommendations),
            timestamp=timezone.now(),
            findings=ordered,
        )


def verify(request: VerificationRequest) -> VerificationResult:
    return VerificationEngine().verify(request)
