from __future__ import annotations

import json

from django.core.management.base import BaseCommand, CommandError
from django.core.serializers.json import DjangoJSONEncoder

from tradecheck.models import VerificationSource
from tradecheck.risk_engine.types import VerificationRequest
from tradecheck.services import run_and_persist_verification


class Command(BaseCommand):
    help = 'Verify a single trade invoice and print its risk assessment.'

    def add_arguments(self, parser):
        parser.add_argument('--invoice-id', type=str, required=True, help='Invoice identifier.')
        parser.add_argument('--document-hash', type=str, default='', help='Hash of the invoice document.')
        parser.add_argument('--commodity', type=str, default='', help='Commodity description.')
        parser.add_argument('--amount', type=str, default='0', help='Invoice amount in whole currency units.')
        parser.add_argument('--supplier-country', type=str, default='', help='Supplier (exporter) country.')
        parser.add_argument('--buyer-country', type=str, default='', help='Buyer (importer) country.')
        parser.add_argument('--exporter', type=str, default='', help='Exporter name.')
        parser.add_argument('--buyer', type=str, default='', help='Buyer name.')
        parser.add_argument('--persist', action='store_true', help='Store the verification in the database.')
        parser.add_argument('--json', action='store_true', help='Print the full result as JSON.')

    def handle(self, *args, **options):
        invoice_id = (options['invoice_id'] or '').strip()
        if not invoice_id:
            raise CommandError('--invoice-id must not be empty.')

        request = VerificationRequest(
            invoice_id=invoice_id,
            document_hash=options['document_hash'],
            commodity=options['commodity'],
            amount=options['amount'],
            supplier_country=options['supplier_country'],
            buyer_country=options['buyer_country'],
            exporter_name=options['exporter'],
            buyer_name=options['buyer'],
        )
        result, record = run_and_persist_verification(
            request,
            source=VerificationSource.COMMAND,
            persist=bool(options['persist']),
        )

        if options['json']:
            payload = result.as_payload(include_findings=True)
            payload['persisted'] = record is not None
            self.stdout.write(json.dumps(payload, cls=DjangoJSONEncoder, indent=2))
            return

        self.stdout.write(f'Verification: {result.verification_id}')
        self.stdout.write(f'Invoice: {result.invoice_id}')
        self.stdout.write(f'Risk score: {result.risk_score}')
        self.stdout.write(f'Credit rating: {result.credit_rating}')
        for check_name, check_status in result.checks.items():
            self.stdout.write(f'  {check_name}: {check_status}')
        for line in result.recommendations:
            self.stdout.write(f'  - {line}')
        if options['persist'] and record is None:
            self.stdout.write(self.style.WARNING('Result could not be stored.'))

        if result.is_valid:
            self.stdout.write(self.style.SUCCESS('Invoice is valid.'))
        else:
            self.stdout.write(self.style.ERROR('Invoice is not valid.'))
