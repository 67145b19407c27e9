import json
from pathlib import Path
import tempfile

from django.test import SimpleTestCase, override_settings

from tradecheck.models import SanctionsStatus
from tradecheck.risk_engine.checks.sanctions import SanctionsScreener
from tradecheck.risk_engine.engine import EngineConfig, VerificationEngine
from tradecheck.risk_engine.reference_data import ReferenceData, TradeCorridor, load_reference_data, reset_reference_data_cache
from tradecheck.tests.factories import build_request


class ReferenceDataTests(SimpleTestCase):
    def setUp(self):
        reset_reference_data_cache()
        self.addCleanup(reset_reference_data_cache)

    def test_defaults_are_loaded_once(self):
        self.assertIs(load_reference_data(), load_reference_data())
        self.assertIn('iran', load_reference_data().sanctioned_countries)

    def test_from_dict_overrides_and_normalizes(self):
        data = ReferenceData.from_dict(
            {
                'sanctioned_countries': [' Singapore ', ''],
                'trade_corridors': [{'origin': 'Singapore', 'destination': 'United States'}],
            },
        )

        self.assertEqual(data.sanctioned_countries, ('singapore',))
        self.assertEqual(
            data.trade_corridors,
            (TradeCorridor('singapore', 'united states', 'High-risk trade corridor'),),
        )
        self.assertEqual(data.fraud_keywords, ReferenceData().fraud_keywords)

    def test_from_dict_rejects_unknown_keys(self):
        with self.assertRaises(ValueError):
            ReferenceData.from_dict({'sanctioned_planets': ['mars']})

    def test_injected_reference_data_changes_screening(self):
        data = ReferenceData.from_dict({'sanctioned_countries': ['singapore']})

        finding = SanctionsScreener(data).screen(build_request())
        result = VerificationEngine(reference_data=data, config=EngineConfig()).verify(build_request())

        self.assertEqual(finding.status, SanctionsStatus.FLAGGED)
        self.assertFalse(result.is_valid)

    def test_override_file_from_settings(self):
        with tempfile.TemporaryDirectory() as directory:
            path = Path(directory) / 'reference.json'
            path.write_text(json.dumps({'high_risk_countries': ['united states']}), encoding='utf-8')

            with override_settings(TRADECHECK_REFERENCE_DATA_PATH=str(path)):
                reset_reference_data_cache()
                data = load_reference_data()

        self.assertEqual(data.high_risk_countries, ('united states',))
        self.assertIn('iran', data.sanctioned_countries)
