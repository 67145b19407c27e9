from __future__ import annotations

from decimal import Decimal

from tradecheck.models import AssessmentStatus
from tradecheck.risk_engine.checks.base import BaseRiskCheck
from tradecheck.risk_engine.similarity import contains_phrase, normalize_term
from tradecheck.risk_engine.types import has_repeated_digits, is_multiple

COMMODITY_HIGH_RISK_POINTS = 35
COMMODITY_AMOUNT_TIERS = (
    (Decimal(100_000_000), 15, 'Very large transaction amount - enhanced oversight applied'),
    (Decimal(10_000_000), 5, 'Large transaction amount - enhanced oversight applied'),
    (Decimal(1_000_000), 2, 'Medium-sized transaction - standard verification applied'),
)

COUNTRY_POINTS = 20
CROSS_BORDER_POINTS = 5
GEOGRAPHIC_HIGH_RISK_THRESHOLD = 30

AMOUNT_TIERS = (
    (Decimal(100_000_000), 25, 'Very large transaction - highest oversight level', ('Board approval required', 'Enhanced audit trail')),
    (Decimal(50_000_000), 15, 'Large transaction - enhanced due diligence', ('Senior management approval',)),
    (Decimal(10_000_000), 6, 'Sizeable transaction - enhanced review', ()),
    (Decimal(1_000_000), 3, 'Medium transaction - standard processing', ()),
)
AMOUNT_ANOMALY_POINTS = 5
AMOUNT_HIGH_RISK_THRESHOLD = 20


def is_unusual_amount(amount: Decimal) -> bool:
    return has_repeated_digits(amount) or is_multiple(amount, 1_000_000)


class CommodityRiskCheck(BaseRiskCheck):
    name = 'commodity_check'
    label = 'Commodity risk assessment'
    max_points = 50
    error_penalty = 15

    def run(self, request):
        commodity = (request.commodity or '').strip()
        amount = request.amount_value

        score = 0
        status = AssessmentStatus.APPROVED
        details = []
        indicators = []
        recommendations = []

        matched = [term for term in self.reference_data.high_risk_commodities if contains_phrase(commodity, term)]
        if matched:
            status = AssessmentStatus.HIGH_RISK
            score += COMMODITY_HIGH_RISK_POINTS
            details.append(f'High-risk commodity detected: {commodity}')
            indicators.append('HIGH_RISK_COMMODITY')
            recommendations.extend(['Enhanced due diligence required', 'Additional documentation needed'])
        else:
            details.append('Commodity cleared for standard processing')

        for floor, points, detail in COMMODITY_AMOUNT_TIERS:
            if amount > floor:
                score += points
                details.append(detail)
                if points >= 5:
                    recommendations.append('Senior management approval required')
                break

        return self.finding(
            status=status,
            score=score,
            details=details,
            indicators=indicators,
            recommendations=recommendations,
            evidence={'matched_terms': matched},
        )


class GeographicRiskCheck(BaseRiskCheck):
    name = 'geographic_check'
    label = 'Geographic risk assessment'
    max_points = 45
    error_penalty = 15

    def is_high_risk_country(self, country: str) -> bool:
        return any(contains_phrase(country, term) for term in self.reference_data.high_risk_countries)

    def run(self, request):
        score = 0
        details = []
        indicators = []
        recommendations = []

        if self.is_high_risk_country(request.supplier_country):
            score += COUNTRY_POINTS
            details.append(f'High-risk supplier country: {request.supplier_country}')
            indicators.append('HIGH_RISK_SUPPLIER_COUNTRY')
            recommendations.append('Enhanced country risk monitoring')

        if self.is_high_risk_country(request.buyer_country):
            score += COUNTRY_POINTS
            details.append(f'High-risk buyer country: {request.buyer_country}')
            indicators.append('HIGH_RISK_BUYER_COUNTRY')
            recommendations.append('Additional compliance checks required')

        if normalize_term(request.supplier_country) != normalize_term(request.buyer_country):
            score += CROSS_BORDER_POINTS
            details.append('Cross-border trade risk factors identified')
            indicators.append('CROSS_BORDER')

        if score == 0:
            details.append('Low geographic risk assessment')

        return self.finding(
            status=AssessmentStatus.HIGH_RISK if score > GEOGRAPHIC_HIGH_RISK_THRESHOLD else AssessmentStatus.APPROVED,
            score=score,
            details=details,
            indicators=indicators,
            recommendations=recommendations,
        )


class AmountRiskCheck(BaseRiskCheck):
    name = 'amount_check'
    label = 'Amount risk assessment'
    max_points = 30
    error_penalty = 15

    def run(self, request):
        amount = request.amount_value
        score = 0
        details = []
        indicators = []
        recommendations = []

        for floor, points, detail, tier_recommendations in AMOUNT_TIERS:
            if amount > floor:
                score += points
                details.append(detail)
                recommendations.extend(tier_recommendations)
                break
        else:
            details.append('Standard transaction amount')

        if is_unusual_amount(amount):
            score += AMOUNT_ANOMALY_POINTS
            details.append('Unusual amount pattern detected')
            indicators.append('UNUSUAL_AMOUNT')
            recommendations.append('Additional verification recommended')

        return self.finding(
            status=AssessmentStatus.HIGH_RISK if score > AMOUNT_HIGH_RISK_THRESHOLD else AssessmentStatus.APPROVED,
            score=score,
            details=details,
            indicators=indicators,
            recommendations=recommendations,
            evidence={'amount': str(amount)},
        )


class RiskAssessor:
    def __init__(self, reference_data=None):
        self.commodity = CommodityRiskCheck(reference_data)
        self.geographic = GeographicRiskCheck(reference_data)
        self.amount = AmountRiskCheck(reference_data)

    def assess_commodity(self, request):
        return self.commodity.run(request)

    def assess_geographic(self, request):
        return self.geographic.run(request)

    def assess_amount(self, request):
        return self.amount.run(request)

    def assess(self, request):
        return (
            self.assess_commodity(request),
            self.assess_geographic(request),
            self.assess_amount(request),
        )
