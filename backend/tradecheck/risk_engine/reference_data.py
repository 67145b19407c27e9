from __future__ import annotations

from dataclasses import dataclass, fields, replace
from functools import lru_cache
import json
import logging
from pathlib import Path
from typing import Any, Mapping

from django.conf import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TradeCorridor:
    origin: str
    destination: str
    description: str


@dataclass(frozen=True)
class ReferenceData:
    sanctioned_entities: tuple[str, ...] = (
        'vladimir putin',
        'kim jong un',
        'nicolas maduro',
        'bashar al-assad',
        'alexander lukashenko',
        'ali khamenei',
        'ebrahim raisi',
        'rosneft',
        'gazprom bank',
        'sberbank',
        'vtb bank',
        'alfa bank',
        'central bank of iran',
        'bank of korea',
        'venezuela oil company',
        'wagner group',
        'islamic revolutionary guard',
        'hezbollah',
        'sanctioned corp',
        'blocked entity',
        'denied party',
        'restricted company',
        'embargo trading',
        'prohibited exports',
        'banned imports',
        'blacklisted firm',
    )
    sanctions_keywords: tuple[str, ...] = (
        'military',
        'defense',
        'nuclear',
        'weapons',
        'arms',
        'missile',
        'chemical',
        'biological',
    )
    sanctioned_countries: tuple[str, ...] = (
        'north korea',
        'dprk',
        'iran',
        'cuba',
        'syria',
        'russia',
        'russian federation',
        'belarus',
        'myanmar',
        'burma',
        'venezuela',
        'afghanistan',
        'somalia',
        'central african republic',
        'restricted_country',
        'sanctioned_nation',
        'embargo_zone',
    )
    high_risk_regions: tuple[str, ...] = (
        'crimea',
        'donetsk',
        'luhansk',
        'south ossetia',
        'abkhazia',
        'gaza strip',
        'west bank',
        'kashmir',
        'xinjiang',
    )
    trade_corridors: tuple[TradeCorridor, ...] = (
        TradeCorridor('russia', 'china', 'Potential sanctions evasion route'),
        TradeCorridor('iran', 'syria', 'High-risk trade corridor'),
        TradeCorridor('north korea', 'china', 'Prohibited trade route'),
    )
    fraud_keywords: tuple[str, ...] = (
        'fraud',
        'scam',
        'fake',
        'suspicious',
        'shell company',
        'money laundering',
        'ponzi',
        'pyramid',
        'phishing',
        'identity theft',
        'stolen',
        'counterfeit',
        'embezzlement',
        'forgery',
        'racketeering',
        'bribery',
        'corruption',
    )
    high_risk_entity_terms: tuple[str, ...] = (
        'quick cash',
        'instant money',
        'guaranteed profit',
        'risk free',
        'offshore holdings',
        'anonymous corp',
        'bearer shares',
        'shell entity',
        'front company',
        'nominee director',
        'ghost company',
    )
    shell_company_terms: tuple[str, ...] = (
        'holdings',
        'ventures',
        'capital',
        'investments',
        'fund',
        'group',
    )
    generic_scope_terms: tuple[str, ...] = (
        'international',
        'global',
        'worldwide',
        'universal',
    )
    fraud_country_pairs: tuple[tuple[str, str], ...] = (
        ('afghanistan', 'pakistan'),
        ('colombia', 'venezuela'),
        ('mexico', 'guatemala'),
        ('myanmar', 'china'),
        ('somalia', 'kenya'),
        ('syria', 'lebanon'),
    )
    prohibited_goods: tuple[str, ...] = (
        'weapons',
        'drugs',
        'narcotics',
        'stolen goods',
        'counterfeit goods',
        'illegal wildlife',
        'conflict minerals',
        'blood diamonds',
        'human trafficking',
        'organ trafficking',
        'child labor products',
    )
    vague_commodity_terms: tuple[str, ...] = (
        'general goods',
        'various items',
        'mixed products',
        'assorted',
        'miscellaneous',
    )
    low_value_commodities: tuple[str, ...] = (
        'textiles',
        'clothing',
        'food products',
        'paper',
    )
    high_value_commodities: tuple[str, ...] = (
        'electronics',
        'machinery',
        'precious metals',
        'pharmaceuticals',
    )
    high_risk_commodities: tuple[str, ...] = (
        'weapons',
        'ammunition',
        'explosives',
        'nuclear materials',
        'rare earth minerals',
        'conflict minerals',
        'dual-use technology',
    )
    high_risk_countries: tuple[str, ...] = (
        'high_risk_region',
        'conflict_zone',
        'unstable_area',
        'yemen',
        'libya',
        'south sudan',
    )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], base: ReferenceData | None = None) -> ReferenceData:
        base = base or cls()
        known = {item.name for item in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f'Unknown reference data keys: {", ".join(unknown)}')

        overrides: dict[str, Any] = {}
        for key, value in data.items():
            if key == 'trade_corridors':
                overrides[key] = tuple(
                    TradeCorridor(
                        origin=_clean(item['origin']),
                        destination=_clean(item['destination']),
                        description=str(item.get('description') or 'High-risk trade corridor'),
                    )
                    for item in value
                )
            elif key == 'fraud_country_pairs':
                overrides[key] = tuple((_clean(first), _clean(second)) for first, second in value)
            else:
                overrides[key] = tuple(term for term in (_clean(item) for item in value) if term)
        return replace(base, **overrides)


def _clean(value: Any) -> str:
    return str(value or '').strip().lower()


@lru_cache(maxsize=1)
def load_reference_data() -> ReferenceData:
    path = (getattr(settings, 'TRADECHECK_REFERENCE_DATA_PATH', '') or '').strip()
    if not path:
        return ReferenceData()

    with Path(path).open(encoding='utf-8') as handle:
        data = json.load(handle)
    logger.info('Loaded reference data overrides from %s (%s keys).', path, len(data))
    return ReferenceData.from_dict(data)


def reset_reference_data_cache() -> None:
    load_reference_data.cache_clear()
