from django.contrib import admin

from tradecheck.models import InvoiceSubmission, VerificationRecord


@admin.register(InvoiceSubmission)
class InvoiceSubmissionAdmin(admin.ModelAdmin):
    list_display = (
        'invoice_id',
        'commodity',
        'amount',
        'supplier_country',
        'buyer_country',
        'created_at',
    )
    search_fields = ('invoice_id', 'exporter_name', 'buyer_name')


@admin.register(VerificationRecord)
class VerificationRecordAdmin(admin.ModelAdmin):
    list_display = ('invoice_id', 'verified_at', 'risk_score', 'credit_rating', 'is_valid', 'source')
    list_filter = ('credit_rating', 'is_valid', 'source')
    search_fields = ('invoice_id', 'verification_id')
    readonly_fields = (
        'verification_id',
        'submission',
        'invoice_id',
        'document_hash',
        'is_valid',
        'risk_score',
        'credit_rating',
        'checks',
        'details',
        'recommendations',
        'processing_time_ms',
        'source',
        'verified_at',
    )
