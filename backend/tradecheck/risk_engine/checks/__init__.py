from tradecheck.risk_engine.checks.document_integrity import DocumentIntegrityChecker
from tradecheck.risk_engine.checks.fraud import FraudDetector
from tradecheck.risk_engine.checks.risk_assessment import (
    AmountRiskCheck,
    CommodityRiskCheck,
    GeographicRiskCheck,
    RiskAssessor,
)
from tradecheck.risk_engine.checks.sanctions import SanctionsScreener

CHECK_CLASSES = {
    DocumentIntegrityChecker.name: DocumentIntegrityChecker,
    SanctionsScreener.name: SanctionsScreener,
    FraudDetector.name: FraudDetector,
    CommodityRiskCheck.name: CommodityRiskCheck,
    GeographicRiskCheck.name: GeographicRiskCheck,
    AmountRiskCheck.name: AmountRiskCheck,
}
