import uuid

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class DocumentStatus(models.TextChoices):
    VERIFIED = 'VERIFIED', 'Verified'
    INVALID = 'INVALID', 'Invalid'
    ERROR = 'ERROR', 'Error'


class SanctionsStatus(models.TextChoices):
    CLEAR = 'CLEAR', 'Clear'
    FLAGGED = 'FLAGGED', 'Flagged'
    ERROR = 'ERROR', 'Error'


class FraudStatus(models.TextChoices):
    PASSED = 'PASSED', 'Passed'
    FAILED = 'FAILED', 'Failed'
    ERROR = 'ERROR', 'Error'


class AssessmentStatus(models.TextChoices):
    APPROVED = 'APPROVED', 'Approved'
    HIGH_RISK = 'HIGH_RISK', 'High Risk'
    ERROR = 'ERROR', 'Error'


class CreditRating(models.TextChoices):
    AAA = 'AAA', 'AAA'
    AA = 'AA', 'AA'
    A = 'A', 'A'
    BBB = 'BBB', 'BBB'
    BB = 'BB', 'BB'
    B = 'B', 'B'
    CCC = 'CCC', 'CCC'
    D = 'D', 'D'


class VerificationSource(models.TextChoices):
    API = 'API', 'API'
    MINIMAL_API = 'MINIMAL_API', 'Minimal API'
    COMMAND = 'COMMAND', 'Management Command'


class InvoiceSubmission(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    invoice_id = models.CharField(max_length=128, db_index=True)
    document_hash = models.CharField(max_length=255)
    commodity = models.CharField(max_length=255)
    amount = models.CharField(max_length=64)
    supplier_country = models.CharField(max_length=128)
    buyer_country = models.CharField(max_length=128)
    exporter_name = models.CharField(max_length=255)
    buyer_name = models.CharField(max_length=255)
    metadata = models.JSONField(default=dict)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self) -> str:
        return f'{self.invoice_id} ({self.commodity})'


class VerificationRecord(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    verification_id = models.CharField(max_length=64, unique=True, db_index=True)
    submission = models.ForeignKey(
        InvoiceSubmission,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='verifications',
    )
    invoice_id = models.CharField(max_length=128, db_index=True)
    document_hash = models.CharField(max_length=255)
    is_valid = models.BooleanField()
    risk_score = models.IntegerField(
        validators=[MinValueValidator(0), MaxValueValidator(100)],
    )
    credit_rating = models.CharField(max_length=8, choices=CreditRating.choices)
    checks = models.JSONField(default=dict)
    details = models.JSONField(default=list)
    recommendations = models.JSONField(default=list)
    processing_time_ms = models.PositiveIntegerField(default=0)
    source = models.CharField(max_length=16, choices=VerificationSource.choices, default=VerificationSource.API)
    metadata = models.JSONField(default=dict)
    verified_at = models.DateTimeField(db_index=True)

    class Meta:
        ordering = ['-verified_at']
        indexes = [
            models.Index(fields=['credit_rating'], name='tradecheck__credit__a1c3e2_idx'),
            models.Index(fields=['is_valid'], name='tradecheck__is_vali_5f9b7d_idx'),
        ]

    def __str__(self) -> str:
        return f'{self.invoice_id}: {self.risk_score} ({self.credit_rating})'
