from django.conf import settings
from django.http import Http404
from django.utils import timezone
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from tradecheck.auth import ApiTokenPermission
from tradecheck.models import VerificationRecord, VerificationSource
from tradecheck.serializers import (
    MinimalVerificationRequestSerializer,
    VerificationRecordSerializer,
    VerificationRequestSerializer,
)
from tradecheck.services import build_verification_stats, minimal_result, run_and_persist_verification

HISTORY_DEFAULT_LIMIT = 50
HISTORY_MAX_LIMIT = 200


class HealthAPIView(APIView):
    throttle_scope = 'default'
    authentication_classes = []
    permission_classes = [AllowAny]

    def get(self, request):
        return Response({'status': 'ok', 'timestamp': timezone.now(), 'version': settings.APP_VERSION})


class VerifyAPIView(APIView):
    throttle_scope = 'verify'
    authentication_classes = []
    permission_classes = [ApiTokenPermission]

    def post(self, request):
        serializer = VerificationRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        payload = serializer.validated_data
        result, record = run_and_persist_verification(
            serializer.to_verification_request(),
            source=VerificationSource.API,
            metadata=payload.get('metadata') or {},
        )

        response_payload = result.as_payload(include_findings=payload.get('include_findings', False))
        response_payload['persisted'] = record is not None
        return Response(response_payload, status=status.HTTP_200_OK)


class MinimalVerifyAPIView(APIView):
    throttle_scope = 'verify'
    authentication_classes = []
    permission_classes = [ApiTokenPermission]

    def post(self, request):
        serializer = MinimalVerificationRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result, _ = run_and_persist_verification(
            serializer.to_verification_request(),
            source=VerificationSource.MINIMAL_API,
            metadata=serializer.validated_data.get('metadata') or {},
        )
        return Response({'result': minimal_result(result)}, status=status.HTTP_200_OK)


class VerificationStatusAPIView(APIView):
    throttle_scope = 'lookup'
    authentication_classes = []
    permission_classes = [ApiTokenPermission]

    def get(self, request, verification_id: str):
        try:
            record = VerificationRecord.objects.get(verification_id=verification_id)
        except VerificationRecord.DoesNotExist as exc:
            raise Http404('Verification not found') from exc

        return Response(VerificationRecordSerializer(record).data)


class VerificationHistoryAPIView(APIView):
    throttle_scope = 'lookup'
    authentication_classes = []
    permission_classes = [ApiTokenPermission]

    def get(self, request, invoice_id: str):
        try:
            limit = min(max(int(request.query_params.get('limit', HISTORY_DEFAULT_LIMIT)), 1), HISTORY_MAX_LIMIT)
        except ValueError:
            limit = HISTORY_DEFAULT_LIMIT

        records = VerificationRecord.objects.filter(invoice_id=invoice_id).order_by('-verified_at')[:limit]
        return Response(
            {
                'invoice_id': invoice_id,
                'results': VerificationRecordSerializer(records, many=True).data,
            },
        )


class VerificationStatsAPIView(APIView):
    throttle_scope = 'lookup'
    authentication_classes = []
    permission_classes = [ApiTokenPermission]

    def get(self, request):
        return Response(build_verification_stats())
