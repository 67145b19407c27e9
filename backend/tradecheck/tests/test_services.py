from unittest.mock import patch

from django.db import DatabaseError
from django.test import TestCase

from tradecheck.models import InvoiceSubmission, VerificationRecord, VerificationSource
from tradecheck.risk_engine.engine import EngineConfig, VerificationEngine
from tradecheck.services import minimal_result, run_and_persist_verification
from tradecheck.tests.factories import build_request


class RunAndPersistVerificationTests(TestCase):
    def setUp(self):
        self.engine = VerificationEngine(config=EngineConfig())

    def test_persists_submission_and_record(self):
        result, record = run_and_persist_verification(
            build_request(),
            source=VerificationSource.COMMAND,
            metadata={'channel': 'batch'},
            engine=self.engine,
        )

        self.assertIsNotNone(record)
        self.assertEqual(record.verification_id, result.verification_id)
        self.assertEqual(record.credit_rating, 'A')
        self.assertEqual(record.checks['fraud_check'], 'PASSED')
        self.assertEqual(record.details, list(result.details))
        self.assertEqual(record.submission.metadata, {'channel': 'batch'})
        self.assertEqual(record.submission.verifications.count(), 1)

    def test_skips_persistence_when_requested(self):
        result, record = run_and_persist_verification(build_request(), persist=False, engine=self.engine)

        self.assertIsNone(record)
        self.assertEqual(result.risk_score, 36)
        self.assertEqual(VerificationRecord.objects.count(), 0)

    def test_storage_failure_does_not_fail_verification(self):
        with patch.object(VerificationRecord.objects, 'create', side_effect=DatabaseError('disk full')):
            with self.assertLogs('tradecheck.services', level='WARNING') as captured:
                result, record = run_and_persist_verification(build_request(), engine=self.engine)

        self.assertIsNone(record)
        self.assertTrue(result.is_valid)
        self.assertIn('Failed to persist verification', captured.output[0])
        self.assertEqual(InvoiceSubmission.objects.count(), 0)

    def test_minimal_result_format(self):
        valid, _ = run_and_persist_verification(build_request(), persist=False, engine=self.engine)
        invalid, _ = run_and_persist_verification(
            build_request(buyer_country='Iran'),
            persist=False,
            engine=self.engine,
        )

        self.assertEqual(minimal_result(valid), '1,36,A')
        self.assertEqual(minimal_result(invalid), '0,100,D')
