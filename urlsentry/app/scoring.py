# scoring.py
"""
Weighted risk scoring.

Each signal that fires contributes a fixed weight; the total is clamped to
``max_score`` and mapped to a three-tier verdict. Weights live in a single
RiskWeights record so callers (and tests) can pass their own.
"""

from dataclasses import dataclass
from typing import Mapping

HIGH_RISK = "high risk"
MEDIUM_RISK = "medium risk"
LOW_RISK = "low risk"

SCORE_PRECISION = 4


@dataclass(frozen=True)
class RiskWeights:
    phishing: float = 0.9
    shortener: float = 0.3
    ip_address: float = 0.3
    at_symbol: float = 0.3
    suspicious_tld: float = 0.2
    double_slash: float = 0.2
    multiple_subdomains: float = 0.1
    dash_in_domain: float = 0.1
    max_score: float = 1.0
    high_threshold: float = 0.7
    medium_threshold: float = 0.4


DEFAULT_WEIGHTS = RiskWeights()

# feature key -> RiskWeights attribute
FEATURE_WEIGHTS = {
    'has_ip_address': 'ip_address',
    'has_at_symbol': 'at_symbol',
    'has_suspicious_tld': 'suspicious_tld',
    'has_double_slash': 'double_slash',
    'has_multiple_subdomains': 'multiple_subdomains',
    'has_dash_in_domain': 'dash_in_domain',
}


def score(is_shortened: bool, is_phishing: bool, features: Mapping[str, bool],
          weights: RiskWeights = DEFAULT_WEIGHTS) -> float:
    """Return the risk score in [0, weights.max_score]. Missing features count as False."""
    total = 0.0
    if is_phishing:
        total += weights.phishing
    if is_shortened:
        total += weights.shortener
    for feature, attr in FEATURE_WEIGHTS.items():
        if features.get(feature):
            total += getattr(weights, attr)

    # rounding keeps 0.1 + 0.2 style sums on the threshold they were meant to hit
    total = round(total, SCORE_PRECISION)
    return min(total, weights.max_score)


def verdict(risk_score: float, weights: RiskWeights = DEFAULT_WEIGHTS) -> str:
    if risk_score >= weights.high_threshold:
        return HIGH_RISK
    if risk_score >= weights.medium_threshold:
        return MEDIUM_RISK
    return LOW_RISK
