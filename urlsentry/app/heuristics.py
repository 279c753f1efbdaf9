# heuristics.py
"""
Lexical and structural URL features used by the risk scorer.

Public function:
    extract_features(url: str) -> dict

Example:
    >>> from urlsentry.app.heuristics import extract_features
    >>> extract_features("https://secure-login.example.xyz/@admin")
    {'has_suspicious_tld': True, 'has_dash_in_domain': True, ...}
"""

import ipaddress
from typing import Dict, Optional
from urllib.parse import urlsplit

import tldextract

SUSPICIOUS_TLDS = frozenset({
    'xyz', 'top', 'club', 'online', 'site', 'info', 'biz'
})
MAX_DOTS_IN_DOMAIN = 2  # > 2 => multiple subdomains
SCHEME_PREFIX_LENGTH = len("https://")

# bundled public suffix snapshot, no network fetch
_TLD_EXTRACT = tldextract.TLDExtract(suffix_list_urls=())

FEATURE_NAMES = (
    'has_suspicious_tld',
    'has_dash_in_domain',
    'has_multiple_subdomains',
    'has_ip_address',
    'has_at_symbol',
    'has_double_slash',
)


def _is_ip(value: str) -> bool:
    try:
        ipaddress.ip_address(value)
    except ValueError:
        return False
    return True


def _domain(url: str) -> Optional[str]:
    """Return the host name of url, or None if it has none or is an IP literal."""
    try:
        host = urlsplit(url).hostname
    except ValueError:
        return None
    if not host or _is_ip(host):
        return None
    return host


def _registrable_label(domain: str) -> str:
    """
    Return the registrable label of domain ('example' for 'a.example.co.uk').
    Hosts without a known public suffix are returned whole.
    """
    ext = _TLD_EXTRACT(domain)
    if not ext.suffix or not ext.domain:
        return domain
    return ext.domain


def extract_features(url: str) -> Dict[str, bool]:
    """
    Compute boolean features for a normalized URL.

    Domain-based features (suspicious TLD, dash, subdomains) are omitted when
    the URL has no domain; treat a missing key as False.
    """
    features = {}

    domain = _domain(url)
    if domain:
        labels = domain.rstrip('.').split('.')
        if len(labels) > 1:
            features['has_suspicious_tld'] = labels[-1] in SUSPICIOUS_TLDS
        features['has_dash_in_domain'] = '-' in _registrable_label(domain)
        features['has_multiple_subdomains'] = domain.count('.') > MAX_DOTS_IN_DOMAIN

    # whole string, not just the host
    features['has_ip_address'] = _is_ip(url)
    features['has_at_symbol'] = '@' in url
    features['has_double_slash'] = '//' in url[SCHEME_PREFIX_LENGTH:]

    return features
