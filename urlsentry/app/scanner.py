# scanner.py
"""
Main orchestration of the URL analysis pipeline.

normalize -> blacklist sources + shortener check + features -> score -> result
"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from .errors import InvalidURLError
from .heuristics import extract_features
from .normalizer import is_valid, normalize
from .scoring import DEFAULT_WEIGHTS, RiskWeights, score, verdict
from .shorteners import is_known_shortener
from .threat_intel import LocalBlacklist, RemoteBlacklist, blacklist_hits

logger = logging.getLogger("scanner")

FEATURE_DESCRIPTIONS = {
    'has_suspicious_tld': "Domain uses a suspicious top-level domain",
    'has_dash_in_domain': "Registrable domain contains a hyphen",
    'has_multiple_subdomains': "Domain has multiple subdomains",
    'has_ip_address': "URL is an IP address",
    'has_at_symbol': "URL contains an '@' symbol",
    'has_double_slash': "URL contains '//' after the scheme",
}


@dataclass(frozen=True)
class AnalysisResult:
    url: str
    is_shortened: bool
    is_phishing: bool
    risk_score: float
    analysis: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        # read-only copy, so the result cannot change after construction
        object.__setattr__(self, "analysis", MappingProxyType(dict(self.analysis)))

    @property
    def risk_level(self) -> str:
        return self.analysis.get("risk_level", "")

    def to_dict(self) -> dict:
        return {
            "url": self.url,
            "is_shortened": self.is_shortened,
            "is_phishing": self.is_phishing,
            "risk_score": self.risk_score,
            "analysis": dict(self.analysis),
        }


def _describe(hits: Mapping[str, bool], is_shortened: bool, features: Mapping[str, bool], level: str) -> dict:
    analysis = {"risk_level": level}
    for source, hit in hits.items():
        if hit:
            analysis[f"blacklist_{source}"] = f"URL found in {source} phishing blacklist"
    if is_shortened:
        analysis["shortener"] = "URL uses a known link shortening service"
    for feature, description in FEATURE_DESCRIPTIONS.items():
        if features.get(feature):
            analysis[feature] = description
    return analysis


def analyze(raw: str, remote: RemoteBlacklist, local: Optional[LocalBlacklist] = None,
            weights: RiskWeights = DEFAULT_WEIGHTS) -> AnalysisResult:
    """
    Run every check on raw and combine them into an AnalysisResult.

    raw must already pass is_valid(); an invalid input raises InvalidURLError
    instead of being analysed. The checks are independent of one another and
    all of them always run.
    """
    if not is_valid(raw):
        raise InvalidURLError(raw)
    if local is None:
        local = LocalBlacklist()

    url = normalize(raw)

    # 1. Blacklists
    hits = blacklist_hits(url, [local, remote])
    is_phishing = any(hits.values())

    # 2. Shortener
    is_shortened = is_known_shortener(url)

    # 3. Lexical features
    features = extract_features(url)

    # 4. Score
    risk_score = score(is_shortened, is_phishing, features, weights)
    level = verdict(risk_score, weights)
    logger.info("Analyzed %s: score=%s verdict=%s", url, risk_score, level)

    return AnalysisResult(
        url=url,
        is_shortened=is_shortened,
        is_phishing=is_phishing,
        risk_score=risk_score,
        analysis=_describe(hits, is_shortened, features, level),
    )
