from decimal import Decimal

from django.test import SimpleTestCase

from tradecheck.models import FraudStatus
from tradecheck.risk_engine.checks.fraud import FraudDetector
from tradecheck.tests.factories import build_request


class FraudDetectorTests(SimpleTestCase):
    def setUp(self):
        self.detector = FraudDetector()

    def test_round_amount_is_only_indicator_for_clean_invoice(self):
        finding = self.detector.detect(build_request())

        self.assertEqual(finding.status, FraudStatus.PASSED)
        self.assertEqual(finding.score_contribution, 10)
        self.assertEqual(finding.details[0], 'Low fraud risk detected')
        self.assertIn('Fraud analysis completed with score: 10/100', finding.details)
        self.assertIn('ROUND_AMOUNT', finding.indicators)

    def test_amount_just_under_ten_thousand_is_structuring(self):
        finding = self.detector.detect(build_request(amount='9999'))

        self.assertEqual(finding.status, FraudStatus.PASSED)
        self.assertEqual(finding.score_contribution, 40)
        self.assertIn('STRUCTURING_10K', finding.indicators)
        self.assertIn('VALUE_MISMATCH', finding.indicators)
        self.assertNotIn('SUSPICIOUS_MULTIPLE', finding.indicators)
        self.assertEqual(finding.details[0], 'Medium fraud risk detected')
        self.assertEqual(finding.evidence['partial_scores']['structuring'], 25)

    def test_shell_companies_dealing_with_each_other_fail(self):
        finding = self.detector.detect(
            build_request(
                exporter_name='Global Fraud Holdings',
                buyer_name='Global Fraud Holdings International',
            ),
        )

        self.assertEqual(finding.status, FraudStatus.FAILED)
        self.assertGreaterEqual(finding.score_contribution, 70)
        self.assertIn('SHELL_COMPANY', finding.indicators)
        self.assertIn('SELF_DEALING', finding.indicators)
        self.assertIn('FRAUD_KEYWORD', finding.indicators)
        self.assertEqual(finding.details[0], 'High fraud risk detected')
        self.assertIn('Enhanced due diligence on counter-parties required', finding.recommendations)

    def test_fraud_country_pair_is_flagged(self):
        finding = self.detector.detect(build_request(supplier_country='Colombia', buyer_country='Venezuela'))

        self.assertIn('FRAUD_CORRIDOR', finding.indicators)
        self.assertEqual(finding.evidence['partial_scores']['shell_geographic'], 20)

    def test_fraud_country_pair_matches_punctuated_names(self):
        finding = self.detector.detect(build_request(supplier_country='Syria.', buyer_country='  Lebanon-'))

        self.assertIn('FRAUD_CORRIDOR', finding.indicators)

    def test_prohibited_goods_match_hyphenated_commodity(self):
        finding = self.detector.detect(build_request(commodity='Conflict-Minerals', amount='12345'))

        self.assertIn('PROHIBITED_GOODS', finding.indicators)

    def test_vague_commodity_and_prohibited_goods(self):
        finding = self.detector.detect(build_request(commodity='Assorted weapons', amount='12345'))

        self.assertIn('VAGUE_COMMODITY', finding.indicators)
        self.assertIn('PROHIBITED_GOODS', finding.indicators)
        self.assertIn('Commodity Risk', finding.evidence['categories'])

    def test_unusual_precision_on_large_amount(self):
        finding = self.detector.detect(build_request(amount='250000.75'))

        self.assertIn('UNUSUAL_PRECISION', finding.indicators)

    def test_amount_with_huge_exponent_completes(self):
        finding = self.detector.detect(build_request(amount='1e999999999'))

        self.assertEqual(finding.status, FraudStatus.PASSED)
        self.assertEqual(finding.score_contribution, 10)
        self.assertIn('ROUND_AMOUNT', finding.indicators)
        self.assertIn('LARGE_TRANSACTION', finding.indicators)
        self.assertNotIn('SUSPICIOUS_MULTIPLE', finding.indicators)
        self.assertNotIn('UNUSUAL_PRECISION', finding.indicators)

    def test_near_duplicate_names(self):
        self.assertTrue(self.detector.are_near_duplicates('Acme Trading', 'ACME Trading Co.'))
        self.assertFalse(self.detector.are_near_duplicates('Test Exports Ltd', 'Test Corp USA'))
        self.assertFalse(self.detector.are_near_duplicates('', 'Test Corp USA'))

    def test_name_manipulation_patterns(self):
        self.assertTrue(self.detector.has_name_manipulation('Aaaaa Trading'))
        self.assertTrue(self.detector.has_name_manipulation('Trading 12345'))
        self.assertTrue(self.detector.has_name_manipulation('Trading $$ Co'))
        self.assertFalse(self.detector.has_name_manipulation('Smith & Sons Ltd.'))

    def test_value_mismatch_for_low_value_goods(self):
        self.assertTrue(self.detector.is_value_mismatch(Decimal('2000000'), 'cotton textiles'))
        self.assertFalse(self.detector.is_value_mismatch(Decimal('500000'), 'cotton textiles'))

    def test_score_never_exceeds_one_hundred(self):
        finding = self.detector.detect(
            build_request(
                commodity='Misc',
                amount='9999.5',
                exporter_name='Fake Scam Holdings Global 99999',
                buyer_name='Fake Scam Holdings Global 99999 $$',
                supplier_country='Syria',
                buyer_country='Lebanon',
            ),
        )

        self.assertEqual(finding.status, FraudStatus.FAILED)
        self.assertLessEqual(finding.score_contribution, 100)
