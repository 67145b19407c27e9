from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import datetime
from decimal import Decimal, InvalidOperation
from types import MappingProxyType
from typing import Any, Mapping

CHECK_ORDER = (
    'document_integrity',
    'sanctions_check',
    'fraud_check',
    'commodity_check',
    'geographic_check',
    'amount_check',
)


def coerce_amount(value: Any) -> Decimal:
    if isinstance(value, bool) or value is None:
        return Decimal(0)
    if isinstance(value, float):
        value = repr(value)
    try:
        amount = Decimal(str(value).strip().replace(',', ''))
    except (InvalidOperation, ArithmeticError, ValueError):
        return Decimal(0)
    if not amount.is_finite() or amount < 0:
        return Decimal(0)
    return amount


def is_integral(amount: Decimal) -> bool:
    if not amount.is_finite():
        return False
    _, digits, exponent = amount.as_tuple()
    if exponent >= 0:
        return True
    return all(digit == 0 for digit in digits[exponent:])


def integer_digits(amount: Decimal) -> tuple[tuple[int, ...], int]:
    """Split an integral amount into (coefficient digits, power of ten).

    Works on the digit tuple so that amounts with huge exponents are never
    expanded into full integers or strings.
    """
    _, digits, exponent = amount.as_tuple()
    if exponent < 0:
        digits = digits[:exponent] or (0,)
        exponent = 0
    return tuple(digits), exponent


def is_multiple(amount: Decimal, base: int) -> bool:
    if amount < base or not is_integral(amount):
        return False
    digits, exponent = integer_digits(amount)
    remainder = 0
    for digit in digits:
        remainder = (remainder * 10 + digit) % base
    return remainder * pow(10, exponent, base) % base == 0


def has_repeated_digits(amount: Decimal) -> bool:
    if amount <= 0 or not is_integral(amount):
        return False
    digits, exponent = integer_digits(amount)
    if exponent:
        return False
    return len(digits) > 1 and len(set(digits)) == 1


def freeze(value: Any) -> Any:
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple, set, frozenset)):
        return tuple(freeze(item) for item in value)
    return value


def thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {key: thaw(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [thaw(item) for item in value]
    return value


@dataclass(frozen=True)
class VerificationRequest:
    invoice_id: str
    document_hash: str
    commodity: str
    amount: Any
    supplier_country: str
    buyer_country: str
    exporter_name: str
    buyer_name: str

    @property
    def amount_value(self) -> Decimal:
        return coerce_amount(self.amount)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> VerificationRequest:
        values = {}
        for item in fields(cls):
            raw = payload.get(item.name)
            if item.name == 'amount':
                values[item.name] = raw if raw is not None else '0'
            else:
                values[item.name] = '' if raw is None else str(raw)
        return cls(**values)

    def validate_shape(self) -> None:
        for item in fields(self):
            if item.name == 'amount':
                continue
            value = getattr(self, item.name)
            if not isinstance(value, str):
                raise TypeError(f'{item.name} must be a string, got {type(value).__name__}.')


@dataclass(frozen=True)
class RiskFinding:
    check_name: str
    status: str
    score_contribution: int
    details: tuple[str, ...] = ()
    indicators: tuple[str, ...] = ()
    recommendations: tuple[str, ...] = ()
    evidence: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, 'evidence', freeze(self.evidence or {}))


@dataclass(frozen=True)
class CheckFailure:
    check_name: str
    error_type: str
    message: str


@dataclass(frozen=True)
class VerificationResult:
    verification_id: str
    invoice_id: str
    is_valid: bool
    risk_score: int
    credit_rating: str
    checks: Mapping[str, str]
    details: tuple[str, ...]
    recommendations: tuple[str, ...]
    timestamp: datetime
    findings: tuple[RiskFinding, ...] = ()

    def as_payload(self, include_findings: bool = False) -> dict[str, Any]:
        payload: dict[str, Any] = {
            'verification_id': self.verification_id,
            'invoice_id': self.invoice_id,
            'is_valid': self.is_valid,
            'risk_score': self.risk_score,
            'credit_rating': self.credit_rating,
            'checks': dict(self.checks),
            'details': list(self.details),
            'recommendations': list(self.recommendations),
            'timestamp': self.timestamp,
        }
        if include_findings:
            payload['findings'] = [
                {
                    'check_name': item.check_name,
                    'status': item.status,
                    'score_contribution': item.score_contribution,
                    'details': list(item.details),
                    'indicators': list(item.indicators),
                    'evidence': thaw(item.evidence),
                }
                for item in self.findings
            ]
        return payload
