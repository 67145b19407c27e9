import json

from rest_framework import serializers

from tradecheck.models import VerificationRecord
from tradecheck.risk_engine.types import VerificationRequest


class VerificationRequestSerializer(serializers.Serializer):
    invoice_id = serializers.CharField(max_length=128)
    document_hash = serializers.CharField(max_length=255, allow_blank=True)
    commodity = serializers.CharField(max_length=255, allow_blank=True)
    amount = serializers.CharField(max_length=64, allow_blank=True)
    supplier_country = serializers.CharField(max_length=128, allow_blank=True)
    buyer_country = serializers.CharField(max_length=128, allow_blank=True)
    exporter_name = serializers.CharField(max_length=255, allow_blank=True)
    buyer_name = serializers.CharField(max_length=255, allow_blank=True)
    metadata = serializers.JSONField(required=False, default=dict)
    include_findings = serializers.BooleanField(required=False, default=False)

    def validate_invoice_id(self, value: str) -> str:
        value = value.strip()
        if not value:
            raise serializers.ValidationError('invoice_id is required.')
        return value

    def validate_metadata(self, value):
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise serializers.ValidationError('metadata must be an object.')
        serialized = json.dumps(value, separators=(',', ':'), ensure_ascii=False)
        if len(serialized.encode('utf-8')) > 16384:
            raise serializers.ValidationError('metadata payload is too large.')
        return value

    def to_verification_request(self) -> VerificationRequest:
        return VerificationRequest.from_payload(self.validated_data)



class MinimalVerificationRequestSerializer(VerificationRequestSerializer):
    """Only the invoice id and document hash are required; the rest default to blank."""

    commodity = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')
    amount = serializers.CharField(max_length=64, required=False, allow_blank=True, default='0')
    supplier_country = serializers.CharField(max_length=128, required=False, allow_blank=True, default='')
    buyer_country = serializers.CharField(max_length=128, required=False, allow_blank=True, default='')
    exporter_name = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')
    buyer_name = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')

class VerificationRecordSerializer(serializers.ModelSerializer):
    timestamp = serializers.DateTimeField(source='verified_at')

    class Meta:
        model = VerificationRecord
        fields = [
            'verification_id',
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
            'timestamp',
        ]
