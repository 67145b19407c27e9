import uuid

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='InvoiceSubmission',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('invoice_id', models.CharField(db_index=True, max_length=128)),
                ('document_hash', models.CharField(max_length=255)),
                ('commodity', models.CharField(max_length=255)),
                ('amount', models.CharField(max_length=64)),
                ('supplier_country', models.CharField(max_length=128)),
                ('buyer_country', models.CharField(max_length=128)),
                ('exporter_name', models.CharField(max_length=255)),
                ('buyer_name', models.CharField(max_length=255)),
                ('metadata', models.JSONField(default=dict)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
            ],
            options={
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='VerificationRecord',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('verification_id', models.CharField(db_index=True, max_length=64, unique=True)),
                ('invoice_id', models.CharField(db_index=True, max_length=128)),
                ('document_hash', models.CharField(max_length=255)),
                ('is_valid', models.BooleanField()),
                (
                    'risk_score',
                    models.IntegerField(
                        validators=[
                            django.core.validators.MinValueValidator(0),
                            django.core.validators.MaxValueValidator(100),
                        ],
                    ),
                ),
                (
                    'credit_rating',
                    models.CharField(
                        choices=[
                            ('AAA', 'AAA'),
                            ('AA', 'AA'),
                            ('A', 'A'),
                            ('BBB', 'BBB'),
                            ('BB', 'BB'),
                            ('B', 'B'),
                            ('CCC', 'CCC'),
                            ('D', 'D'),
                        ],
                        max_length=8,
                    ),
                ),
                ('checks', models.JSONField(default=dict)),
                ('details', models.JSONField(default=list)),
                ('recommendations', models.JSONField(default=list)),
                ('processing_time_ms', models.PositiveIntegerField(default=0)),
                (
                    'source',
                    models.CharField(
                        choices=[('API', 'API'), ('MINIMAL_API', 'Minimal API'), ('COMMAND', 'Management Command')],
                        default='API',
                        max_length=16,
                    ),
                ),
                ('metadata', models.JSONField(default=dict)),
                ('verified_at', models.DateTimeField(db_index=True)),
                (
                    'submission',
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name='verifications',
                        to='tradecheck.invoicesubmission',
                    ),
                ),
            ],
            options={
                'ordering': ['-verified_at'],
                'indexes': [
                    models.Index(fields=['credit_rating'], name='tradecheck__credit__a1c3e2_idx'),
                    models.Index(fields=['is_valid'], name='tradecheck__is_vali_5f9b7d_idx'),
                ],
            },
        ),
    ]
