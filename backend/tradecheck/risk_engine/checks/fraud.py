from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
import re

from tradecheck.models import FraudStatus
from tradecheck.risk_engine.checks.base import BaseRiskCheck
from tradecheck.risk_engine.similarity import contains_phrase, contains_term, normalize_name, normalize_term, similarity
from tradecheck.risk_engine.types import is_integral, is_multiple

FAILED_THRESHOLD = 70

ENTITY_CAP = 50
TRANSACTION_CAP = 40
STRUCTURING_CAP = 40
SHELL_GEOGRAPHIC_CAP = 60
PER_NAME_CAP = 40

NEAR_DUPLICATE_THRESHOLD = 0.7

ROUND_MULTIPLES = (1_000_000, 500_000, 100_000, 50_000)
STRUCTURING_BANDS = (
    (Decimal(9500), Decimal(10000), 25, 'STRUCTURING_10K', '$10K'),
    (Decimal(49500), Decimal(50000), 20, 'STRUCTURING_50K', '$50K'),
)
SUSPICIOUS_MULTIPLES = (7777, 8888, 9999, 11111)
LOW_VALUE_CEILING = Decimal(1_000_000)
HIGH_VALUE_FLOOR = Decimal(10_000)
PRECISION_FLOOR = Decimal(100_000)
LARGE_AMOUNT = Decimal(1_000_000)
EXTREME_AMOUNT = Decimal(10_000_000)

MANIPULATION_PATTERNS = (
    re.compile(r'(.)\1{3,}'),
    re.compile(r'[0-9]{4,}'),
    re.compile(r'[^a-zA-Z0-9\s&\-.]{2,}'),
)

CATEGORY_BY_INDICATOR = {
    'FRAUD_KEYWORD': 'Entity Risk',
    'HIGH_RISK_ENTITY': 'Entity Risk',
    'SELF_DEALING': 'Entity Risk',
    'NAME_MANIPULATION': 'Entity Risk',
    'ROUND_AMOUNT': 'Transaction Risk',
    'VALUE_MISMATCH': 'Transaction Risk',
    'LARGE_TRANSACTION': 'Transaction Risk',
    'UNUSUAL_PRECISION': 'Transaction Risk',
    'STRUCTURING_10K': 'Transaction Risk',
    'STRUCTURING_50K': 'Transaction Risk',
    'SUSPICIOUS_MULTIPLE': 'Transaction Risk',
    'PROHIBITED_GOODS': 'Commodity Risk',
    'VAGUE_COMMODITY': 'Commodity Risk',
    'SHELL_COMPANY': 'Entity Risk',
    'FRAUD_CORRIDOR': 'Geographic Risk',
}


@dataclass
class PartialScore:
    cap: int
    score: int = 0
    indicators: list[str] = field(default_factory=list)
    details: list[str] = field(default_factory=list)

    def add(self, points: int, indicator: str, detail: str) -> None:
        self.score += points
        self.indicators.append(indicator)
        self.details.append(detail)

    @property
    def capped(self) -> int:
        return min(self.score, self.cap)


class FraudDetector(BaseRiskCheck):
    name = 'fraud_check'
    label = 'Fraud detection'
    max_points = 100
    error_penalty = 20

    def detect(self, request):
        amount = request.amount_value
        partials = {
            'entity_name': self.entity_name_risk(request.exporter_name, request.buyer_name),
            'transaction_pattern': self.transaction_pattern_risk(amount, request.commodity),
            'structuring': self.structuring_risk(amount),
            'shell_geographic': self.shell_geographic_risk(request),
        }

        total = min(sum(partial.capped for partial in partials.values()), 100)
        indicators = [item for partial in partials.values() for item in partial.indicators]
        indicator_details = [line for partial in partials.values() for line in partial.details]

        if total < 30:
            headline = 'Low fraud risk detected'
        elif total < 60:
            headline = 'Medium fraud risk detected'
        else:
            headline = 'High fraud risk detected'

        failed = total >= FAILED_THRESHOLD
        recommendations = []
        if failed:
            recommendations.append('Enhanced due diligence on counter-parties required')
        elif total >= 30:
            recommendations.append('Additional verification recommended')

        return self.finding(
            status=FraudStatus.FAILED if failed else FraudStatus.PASSED,
            score=total,
            details=[headline, f'Fraud analysis completed with score: {total}/100', *indicator_details],
            indicators=indicators,
            recommendations=recommendations,
            evidence={
                'partial_scores': {key: partial.capped for key, partial in partials.items()},
                'categories': sorted({CATEGORY_BY_INDICATOR.get(item, 'General Risk') for item in indicators}),
            },
        )

    def run(self, request):
        return self.detect(request)

    def name_risk(self, name: str) -> tuple[int, list[str]]:
        normalized = normalize_term(name)
        score = 0
        tags = []
        for keyword in self.reference_data.fraud_keywords:
            if contains_term(normalized, normalize_term(keyword)):
                score += 20
                tags.append('FRAUD_KEYWORD')
        for term in self.reference_data.high_risk_entity_terms:
            if contains_term(normalized, normalize_term(term)):
                score += 15
                tags.append('HIGH_RISK_ENTITY')
        return min(score, PER_NAME_CAP), tags

    def entity_name_risk(self, exporter_name: str, buyer_name: str) -> PartialScore:
        partial = PartialScore(cap=ENTITY_CAP)

        exporter_score, exporter_tags = self.name_risk(exporter_name)
        buyer_score, buyer_tags = self.name_risk(buyer_name)
        if exporter_score or buyer_score:
            worst_role, worst_score, worst_tags = max(
                ('Exporter', exporter_score, exporter_tags),
                ('Buyer', buyer_score, buyer_tags),
                key=lambda item: item[1],
            )
            partial.score += worst_score
            partial.indicators.extend(dict.fromkeys(worst_tags))
            partial.details.append(f'{worst_role} name contains fraud-associated terms')
            if exporter_score and buyer_score:
                partial.details.append('Both counter-party names contain fraud-associated terms')

        if self.are_near_duplicates(exporter_name, buyer_name):
            partial.add(15, 'SELF_DEALING', 'Exporter and buyer names are near-duplicates (possible self-dealing)')

        if self.has_name_manipulation(exporter_name) or self.has_name_manipulation(buyer_name):
            partial.add(20, 'NAME_MANIPULATION', 'Potential name manipulation detected')

        return partial

    def transaction_pattern_risk(self, amount: Decimal, commodity: str) -> PartialScore:
        partial = PartialScore(cap=TRANSACTION_CAP)
        commodity_text = normalize_term(commodity)

        if any(is_multiple(amount, base) for base in ROUND_MULTIPLES):
            partial.add(10, 'ROUND_AMOUNT', 'Suspiciously round transaction amount')

        if self.is_value_mismatch(amount, commodity_text):
            partial.add(15, 'VALUE_MISMATCH', 'Transaction amount is implausible for the commodity category')

        prohibited = [term for term in self.reference_data.prohibited_goods if contains_phrase(commodity_text, term)]
        if prohibited:
            partial.add(20, 'PROHIBITED_GOODS', f'High-risk or prohibited commodity: {commodity}')

        vague = any(contains_phrase(commodity_text, term) for term in self.reference_data.vague_commodity_terms)
        if vague or len(commodity_text) < 5:
            partial.add(10, 'VAGUE_COMMODITY', 'Vague or non-specific commodity description')

        if amount > EXTREME_AMOUNT:
            partial.add(0, 'LARGE_TRANSACTION', 'Extremely large transaction amount')
        elif amount > LARGE_AMOUNT:
            partial.add(0, 'LARGE_TRANSACTION', 'Large transaction requiring enhanced oversight')

        return partial

    def structuring_risk(self, amount: Decimal) -> PartialScore:
        partial = PartialScore(cap=STRUCTURING_CAP)

        for low, high, points, tag, label in STRUCTURING_BANDS:
            if low <= amount < high:
                partial.add(points, tag, f'Amount appears structured to avoid {label} reporting threshold')

        if amount > PRECISION_FLOOR and not is_integral(amount):
            partial.add(10, 'UNUSUAL_PRECISION', 'Unusual precision for large transaction amount')

        for base in SUSPICIOUS_MULTIPLES:
            if amount > base and is_multiple(amount, base):
                partial.add(15, 'SUSPICIOUS_MULTIPLE', f'Amount is suspicious multiple of {base}')

        return partial

    def shell_geographic_risk(self, request) -> PartialScore:
        partial = PartialScore(cap=SHELL_GEOGRAPHIC_CAP)

        for role, name in (('Exporter', request.exporter_name), ('Buyer', request.buyer_name)):
            if self.appears_to_be_shell_company(name):
                partial.add(30, 'SHELL_COMPANY', f'{role} appears to be a shell company')

        supplier = request.supplier_country
        buyer = request.buyer_country
        for first, second in self.reference_data.fraud_country_pairs:
            if (contains_phrase(supplier, first) and contains_phrase(buyer, second)) or (
                contains_phrase(supplier, second) and contains_phrase(buyer, first)
            ):
                partial.add(
                    20,
                    'FRAUD_CORRIDOR',
                    f'High-risk country combination: {request.supplier_country} / {request.buyer_country}',
                )
                break

        return partial

    def are_near_duplicates(self, first: str, second: str) -> bool:
        left = normalize_name(first)
        right = normalize_name(second)
        if not left or not right:
            return False
        compact_left = left.replace(' ', '')
        compact_right = right.replace(' ', '')
        if compact_left in compact_right or compact_right in compact_left:
            return True
        return similarity(left, right) > NEAR_DUPLICATE_THRESHOLD

    def is_value_mismatch(self, amount: Decimal, commodity_text: str) -> bool:
        is_low_value = any(contains_phrase(commodity_text, term) for term in self.reference_data.low_value_commodities)
        is_high_value = any(contains_phrase(commodity_text, term) for term in self.reference_data.high_value_commodities)
        return (is_low_value and amount > LOW_VALUE_CEILING) or (is_high_value and amount < HIGH_VALUE_FLOOR)

    def appears_to_be_shell_company(self, name: str) -> bool:
        normalized = normalize_term(name)
        has_shell_term = any(contains_term(normalized, normalize_term(term)) for term in self.reference_data.shell_company_terms)
        has_scope_term = any(contains_term(normalized, normalize_term(term)) for term in self.reference_data.generic_scope_terms)
        return has_shell_term and has_scope_term

    @staticmethod
    def has_name_manipulation(name: str) -> bool:
        return any(pattern.search(name or '') for pattern in MANIPULATION_PATTERNS)
