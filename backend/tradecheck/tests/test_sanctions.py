from django.test import SimpleTestCase

from tradecheck.models import SanctionsStatus
from tradecheck.risk_engine.checks.sanctions import SanctionsScreener
from tradecheck.tests.factories import build_request


class SanctionsScreenerTests(SimpleTestCase):
    def setUp(self):
        self.screener = SanctionsScreener()

    def test_ordinary_counterparties_are_clear(self):
        finding = self.screener.screen(build_request())

        self.assertEqual(finding.status, SanctionsStatus.CLEAR)
        self.assertEqual(finding.score_contribution, 0)
        self.assertEqual(finding.details, ('All entities cleared sanctions screening',))
        self.assertEqual(finding.evidence['sanctions_lists'], ())

    def test_exact_entity_match_is_flagged_with_high_confidence(self):
        finding = self.screener.screen(build_request(exporter_name='Rosneft'))

        self.assertEqual(finding.status, SanctionsStatus.FLAGGED)
        self.assertIn('OFAC_SDN', finding.indicators)
        self.assertGreaterEqual(finding.evidence['match_confidence'], 0.8)
        self.assertIn('Rosneft', finding.evidence['flagged_entities'])
        self.assertEqual(finding.score_contribution, 100)

    def test_close_but_not_exact_name_is_potential_match(self):
        finding = self.screener.screen(build_request(buyer_name='Gazprom Banking Co'))

        self.assertEqual(finding.status, SanctionsStatus.FLAGGED)
        self.assertIn('POTENTIAL_MATCH', finding.indicators)
        self.assertNotIn('OFAC_SDN', finding.indicators)
        self.assertLess(finding.evidence['match_confidence'], 0.6)
        self.assertEqual(finding.score_contribution, 50)

    def test_keyword_in_entity_name_is_flagged(self):
        finding = self.screener.screen(build_request(exporter_name='Apex Military Supplies'))

        self.assertEqual(finding.status, SanctionsStatus.FLAGGED)
        self.assertIn('KEYWORD_RISK', finding.indicators)
        self.assertEqual(finding.evidence['match_confidence'], 0.5)

    def test_keyword_inside_another_word_is_not_flagged(self):
        finding = self.screener.screen(build_request(exporter_name='Green Farms Co'))

        self.assertEqual(finding.status, SanctionsStatus.CLEAR)

    def test_sanctioned_buyer_country_is_flagged(self):
        finding = self.screener.screen(build_request(buyer_country='Iran'))

        self.assertEqual(finding.status, SanctionsStatus.FLAGGED)
        self.assertIn('COUNTRY_SANCTIONS', finding.indicators)
        self.assertEqual(finding.score_contribution, 70)

    def test_short_country_code_does_not_match_longer_country_names(self):
        finding = self.screener.screen(build_request(supplier_country='US', buyer_country='Canada'))

        self.assertEqual(finding.status, SanctionsStatus.CLEAR)

    def test_empty_countries_are_not_flagged(self):
        finding = self.screener.screen(build_request(supplier_country='', buyer_country=''))

        self.assertEqual(finding.status, SanctionsStatus.CLEAR)

    def test_high_risk_region_is_flagged(self):
        finding = self.screener.screen(build_request(supplier_country='Crimea'))

        self.assertEqual(finding.status, SanctionsStatus.FLAGGED)
        self.assertIn('HIGH_RISK_REGION', finding.indicators)
        self.assertEqual(finding.score_contribution, 65)

    def test_risky_trade_route_adds_route_flag(self):
        finding = self.screener.screen(build_request(supplier_country='Russia', buyer_country='China'))

        self.assertEqual(finding.status, SanctionsStatus.FLAGGED)
        self.assertIn('COUNTRY_SANCTIONS', finding.indicators)
        self.assertIn('TRADE_ROUTE_RISK', finding.indicators)
        self.assertEqual(finding.score_contribution, 80)
        self.assertEqual(finding.evidence['sanctions_lists'], ('COUNTRY_SANCTIONS', 'TRADE_ROUTE_RISK'))

    def test_thresholds_are_configurable(self):
        strict = SanctionsScreener(high_match_threshold=0.95, potential_match_threshold=0.9)
        finding = strict.screen(build_request(buyer_name='Gazprom Banking Co'))

        self.assertEqual(finding.status, SanctionsStatus.CLEAR)

    def test_country_punctuation_and_spacing_do_not_evade_screening(self):
        for country in ('North-Korea', 'North  Korea', 'north_korea', ' NORTH KOREA. '):
            with self.subTest(country=country):
                finding = self.screener.screen(build_request(buyer_country=country))

                self.assertEqual(finding.status, SanctionsStatus.FLAGGED)
                self.assertIn('COUNTRY_SANCTIONS', finding.indicators)

    def test_trade_route_matches_punctuated_country_names(self):
        finding = self.screener.screen(build_request(supplier_country='Russia', buyer_country='China.'))

        self.assertIn('TRADE_ROUTE_RISK', finding.indicators)

    def test_evidence_is_read_only(self):
        finding = self.screener.screen(build_request(exporter_name='Rosneft'))

        with self.assertRaises(TypeError):
            finding.evidence['match_confidence'] = 0
        with self.assertRaises(AttributeError):
            finding.evidence['flagged_entities'].append('Other Co')
