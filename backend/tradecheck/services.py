from __future__ import annotations

import logging
import time
from typing import Any

from django.conf import settings
from django.db import DatabaseError, transaction
from django.db.models import Avg, Count

from tradecheck.models import CreditRating, InvoiceSubmission, VerificationRecord, VerificationSource
from tradecheck.risk_engine.engine import VerificationEngine
from tradecheck.risk_engine.types import VerificationRequest, VerificationResult

logger = logging.getLogger(__name__)

RECENT_VERIFICATIONS_LIMIT = 10


def persistence_enabled() -> bool:
    return bool(getattr(settings, 'TRADECHECK_PERSIST_RESULTS', True))


def persist_verification(
    request: VerificationRequest,
    result: VerificationResult,
    processing_time_ms: int = 0,
    source: str = VerificationSource.API,
    metadata: dict[str, Any] | None = None,
) -> VerificationRecord | None:
    """Store the submission and its result. Returns None when the write fails."""
    try:
        with transaction.atomic():
            submission = InvoiceSubmission.objects.create(
                invoice_id=request.invoice_id,
                document_hash=request.document_hash,
                commodity=request.commodity,
                amount=str(request.amount)[:64],
                supplier_country=request.supplier_country,
                buyer_country=request.buyer_country,
                exporter_name=request.exporter_name,
                buyer_name=request.buyer_name,
                metadata=dict(metadata or {}),
            )
            record = VerificationRecord.objects.create(
                verification_id=result.verification_id,
                submission=submission,
                invoice_id=result.invoice_id,
                document_hash=request.document_hash,
                is_valid=result.is_valid,
                risk_score=result.risk_score,
                credit_rating=result.credit_rating,
                checks=dict(result.checks),
                details=list(result.details),
                recommendations=list(result.recommendations),
                processing_time_ms=max(int(processing_time_ms), 0),
                source=source,
                metadata=dict(metadata or {}),
                verified_at=result.timestamp,
            )
    except DatabaseError:
        logger.warning('Failed to persist verification %s', result.verification_id, exc_info=True)
        return None
    return record


def run_and_persist_verification(
    request: VerificationRequest,
    source: str = VerificationSource.API,
    metadata: dict[str, Any] | None = None,
    persist: bool | None = None,
    engine: VerificationEngine | None = None,
) -> tuple[VerificationResult, VerificationRecord | None]:
    engine = engine or VerificationEngine()

    started = time.perf_counter()
    result = engine.verify(request)
    processing_time_ms = int((time.perf_counter() - started) * 1000)

    should_persist = persistence_enabled() if persist is None else persist
    if not should_persist:
        return result, None

    record = persist_verification(
        request,
        result,
        processing_time_ms=processing_time_ms,
        source=source,
        metadata=metadata,
    )
    return result, record


def minimal_result(result: VerificationResult) -> str:
    return f'{int(result.is_valid)},{result.risk_score},{result.credit_rating}'


def build_verification_stats() -> dict[str, Any]:
    queryset = VerificationRecord.objects.all()
    totals = queryset.aggregate(total=Count('id'), average_risk_score=Avg('risk_score'))
    total = totals['total'] or 0
    valid = queryset.filter(is_valid=True).count()

    counts = {
        row['credit_rating']: row['count']
        for row in queryset.order_by().values('credit_rating').annotate(count=Count('id'))
    }
    distribution = {rating: counts.get(rating, 0) for rating in CreditRating.values}

    recent = [
        {
            'verification_id': record.verification_id,
            'invoice_id': record.invoice_id,
            'is_valid': record.is_valid,
            'risk_score': record.risk_score,
            'credit_rating': record.credit_rating,
            'verified_at': record.verified_at,
        }
        for record in queryset.order_by('-verified_at')[:RECENT_VERIFICATIONS_LIMIT]
    ]

    average = totals['average_risk_score']
    return {
        'total_verifications': total,
        'valid_verifications': valid,
        'invalid_verifications': total - valid,
        'validation_rate': round(valid / total, 4) if total else 0.0,
        'average_risk_score': round(float(average), 2) if average is not None else 0.0,
        'rating_distribution': distribution,
        'recent_verifications': recent,
    }
