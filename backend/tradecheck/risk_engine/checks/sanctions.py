from __future__ import annotations

from dataclasses import dataclass, field

from tradecheck.models import SanctionsStatus
from tradecheck.risk_engine.checks.base import BaseRiskCheck, unique
from tradecheck.risk_engine.similarity import contains_term, normalize_name, normalize_term, similarity

POTENTIAL_MATCH_DISCOUNT = 0.7
KEYWORD_CONFIDENCE_FLOOR = 0.5
MIN_REVERSE_MATCH_LENGTH = 4

FLAGGED_BASE_POINTS = 50
HIGH_CONFIDENCE_POINTS = 30
MEDIUM_CONFIDENCE_POINTS = 20
LIST_POINTS = {
    'OFAC_SDN': 25,
    'COUNTRY_SANCTIONS': 20,
    'HIGH_RISK_REGION': 15,
    'TRADE_ROUTE_RISK': 10,
}

SANCTIONS_LISTS = {
    'OFAC_SDN': 'US Treasury OFAC Specially Designated Nationals',
    'EU_SANCTIONS': 'European Union Consolidated List',
    'UN_SANCTIONS': 'United Nations Consolidated List',
    'HMT_SANCTIONS': 'UK HM Treasury Financial Sanctions',
}


@dataclass
class ScreeningPartial:
    details: list[str] = field(default_factory=list)
    lists: list[str] = field(default_factory=list)
    flagged_entities: list[str] = field(default_factory=list)
    match_confidence: float = 0.0

    @property
    def flagged(self) -> bool:
        return bool(self.lists)


def _matches_location(value: str, term: str) -> bool:
    value = normalize_term(value)
    term = normalize_term(term)
    if not value or not term:
        return False
    if term in value:
        return True
    return len(value) >= MIN_REVERSE_MATCH_LENGTH and value in term


class SanctionsScreener(BaseRiskCheck):
    name = 'sanctions_check'
    label = 'Sanctions screening'
    max_points = 100
    error_penalty = 25

    def __init__(self, reference_data=None, high_match_threshold: float = 0.8, potential_match_threshold: float = 0.6):
        super().__init__(reference_data)
        self.high_match_threshold = high_match_threshold
        self.potential_match_threshold = potential_match_threshold

    def screen(self, request):
        partials = [
            self.screen_entity(request.exporter_name, 'exporter'),
            self.screen_entity(request.buyer_name, 'buyer'),
            self.screen_country(request.supplier_country, 'supplier'),
            self.screen_country(request.buyer_country, 'buyer'),
            self.screen_trade_route(request.supplier_country, request.buyer_country),
        ]

        details = [line for partial in partials for line in partial.details]
        lists = unique(item for partial in partials for item in partial.lists)
        flagged_entities = unique(item for partial in partials for item in partial.flagged_entities)
        match_confidence = max(partial.match_confidence for partial in partials)
        flagged = any(partial.flagged for partial in partials)

        evidence = {
            'match_confidence': round(match_confidence, 4),
            'flagged_entities': list(flagged_entities),
            'sanctions_lists': list(lists),
            'list_sources': {key: SANCTIONS_LISTS[key] for key in lists if key in SANCTIONS_LISTS},
        }

        if not flagged:
            return self.finding(
                status=SanctionsStatus.CLEAR,
                score=0,
                details=details or ['All entities cleared sanctions screening'],
                evidence=evidence,
            )

        return self.finding(
            status=SanctionsStatus.FLAGGED,
            score=self.flagged_score(match_confidence, lists),
            details=details,
            indicators=lists,
            recommendations=[
                'Escalate to compliance for sanctions review',
                'Obtain beneficial ownership documentation for all counter-parties',
            ],
            evidence=evidence,
        )

    def run(self, request):
        return self.screen(request)

    def flagged_score(self, match_confidence: float, lists) -> int:
        score = FLAGGED_BASE_POINTS
        if match_confidence > self.high_match_threshold:
            score += HIGH_CONFIDENCE_POINTS
        elif match_confidence > self.potential_match_threshold:
            score += MEDIUM_CONFIDENCE_POINTS
        score += sum(points for key, points in LIST_POINTS.items() if key in lists)
        return min(score, 100)

    def screen_entity(self, entity_name: str, role: str) -> ScreeningPartial:
        partial = ScreeningPartial()
        normalized = normalize_name(entity_name)
        if not normalized:
            return partial

        for sanctioned in self.reference_data.sanctioned_entities:
            confidence = similarity(normalized, normalize_name(sanctioned))
            if confidence > self.high_match_threshold:
                partial.lists.append('OFAC_SDN')
                partial.details.append(
                    f'{role} "{entity_name}" matches sanctioned entity "{sanctioned}" '
                    f'with {confidence * 100:.1f}% confidence'
                )
                partial.match_confidence = max(partial.match_confidence, confidence)
            elif confidence > self.potential_match_threshold:
                partial.lists.append('POTENTIAL_MATCH')
                partial.details.append(
                    f'{role} "{entity_name}" potential match with sanctioned entity "{sanctioned}" '
                    f'({confidence * 100:.1f}% confidence)'
                )
                partial.match_confidence = max(partial.match_confidence, confidence * POTENTIAL_MATCH_DISCOUNT)

        keyword_text = normalize_term(entity_name)
        keywords = [
            term
            for term in self.reference_data.sanctions_keywords
            if contains_term(keyword_text, normalize_term(term))
        ]
        if keywords:
            partial.lists.append('KEYWORD_RISK')
            partial.details.append(f'{role} "{entity_name}" contains high-risk keywords: {", ".join(keywords)}')
            partial.match_confidence = max(partial.match_confidence, KEYWORD_CONFIDENCE_FLOOR)

        if partial.flagged:
            partial.flagged_entities.append(entity_name)
        return partial

    def screen_country(self, country: str, role: str) -> ScreeningPartial:
        partial = ScreeningPartial()
        normalized = normalize_term(country)
        if not normalized:
            return partial

        for sanctioned in self.reference_data.sanctioned_countries:
            if _matches_location(normalized, sanctioned):
                partial.lists.append('COUNTRY_SANCTIONS')
                partial.details.append(f'{role} country "{country}" is under international sanctions')
                break

        for region in self.reference_data.high_risk_regions:
            if _matches_location(normalized, region):
                partial.lists.append('HIGH_RISK_REGION')
                partial.details.append(f'{role} location "{country}" is in a high-risk region')
                break

        return partial

    def screen_trade_route(self, supplier_country: str, buyer_country: str) -> ScreeningPartial:
        partial = ScreeningPartial()
        supplier = normalize_term(supplier_country)
        buyer = normalize_term(buyer_country)
        if not supplier or not buyer:
            return partial

        for corridor in self.reference_data.trade_corridors:
            origin = normalize_term(corridor.origin)
            destination = normalize_term(corridor.destination)
            if origin and destination and origin in supplier and destination in buyer:
                partial.lists.append('TRADE_ROUTE_RISK')
                partial.details.append(
                    f'Trade route {supplier_country} -> {buyer_country}: {corridor.description}'
                )
        return partial
