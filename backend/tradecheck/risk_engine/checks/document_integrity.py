from tradecheck.models import DocumentStatus
from tradecheck.risk_engine.checks.base import BaseRiskCheck

MIN_HASH_LENGTH = 32
PREFIXED_HASH_LENGTH = 66


def has_expected_format(document_hash: str) -> bool:
    return document_hash.startswith('0x') or len(document_hash) == PREFIXED_HASH_LENGTH


def passes_checksum(document_hash: str) -> bool:
    body = document_hash[2:] if document_hash.startswith('0x') else document_hash
    return len(body) >= MIN_HASH_LENGTH


class DocumentIntegrityChecker(BaseRiskCheck):
    name = 'document_integrity'
    label = 'Document integrity verification'
    max_points = 30
    error_penalty = 30

    def check(self, document_hash: str):
        document_hash = (document_hash or '').strip()
        evidence = {'hash_length': len(document_hash)}

        if len(document_hash) < MIN_HASH_LENGTH:
            return self.finding(
                status=DocumentStatus.INVALID,
                score=30,
                details=['Document hash appears invalid or corrupted'],
                indicators=['DOCUMENT_CORRUPTED'],
                recommendations=['Request a re-upload of the trade document'],
                evidence=evidence,
            )

        score = 0
        details = []
        indicators = []

        if has_expected_format(document_hash):
            details.append('Document hash format verified')
        else:
            score += 10
            details.append('Document hash format unusual but acceptable')
            indicators.append('UNUSUAL_HASH_FORMAT')

        if passes_checksum(document_hash):
            details.append('Document checksum validated successfully')
        else:
            score += 15
            details.append('Document checksum validation warning')
            indicators.append('CHECKSUM_WARNING')

        return self.finding(
            status=DocumentStatus.VERIFIED,
            score=score,
            details=details,
            indicators=indicators,
            evidence=evidence,
        )

    def run(self, request):
        return self.check(request.document_hash)
