from io import StringIO
import json

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase

from tradecheck.models import VerificationRecord, VerificationSource
from tradecheck.tests.factories import VALID_HASH


def _arguments(**overrides):
    values = {
        '--invoice-id': 'INV-CLI-1',
        '--document-hash': VALID_HASH,
        '--commodity': 'Electronics',
        '--amount': '50000000',
        '--supplier-country': 'Singapore',
        '--buyer-country': 'United States',
        '--exporter': 'Test Exports Ltd',
        '--buyer': 'Test Corp USA',
    }
    values.update(overrides)
    arguments = []
    for key, value in values.items():
        arguments.extend([key, value])
    return arguments


class VerifyInvoiceCommandTests(TestCase):
    def test_prints_summary_without_persisting(self):
        output = StringIO()
        call_command('verify_invoice', *_arguments(), stdout=output)
        rendered = output.getvalue()

        self.assertIn('Risk score: 36', rendered)
        self.assertIn('Credit rating: A', rendered)
        self.assertIn('sanctions_check: CLEAR', rendered)
        self.assertIn('Invoice is valid.', rendered)
        self.assertEqual(VerificationRecord.objects.count(), 0)

    def test_persist_flag_stores_record(self):
        output = StringIO()
        call_command('verify_invoice', *_arguments(), '--persist', stdout=output)

        record = VerificationRecord.objects.get()
        self.assertEqual(record.invoice_id, 'INV-CLI-1')
        self.assertEqual(record.source, VerificationSource.COMMAND)

    def test_json_output(self):
        output = StringIO()
        call_command('verify_invoice', *_arguments(**{'--buyer-country': 'Iran'}), '--json', stdout=output)
        payload = json.loads(output.getvalue())

        self.assertFalse(payload['is_valid'])
        self.assertEqual(payload['checks']['sanctions_check'], 'FLAGGED')
        self.assertEqual(len(payload['findings']), 6)
        self.assertFalse(payload['persisted'])

    def test_blank_invoice_id_is_rejected(self):
        with self.assertRaises(CommandError):
            call_command('verify_invoice', *_arguments(**{'--invoice-id': '   '}), stdout=StringIO())
