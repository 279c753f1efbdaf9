# shorteners.py
"""Static lookup of known link-shortening services."""

from urllib.parse import urlsplit

SHORTENER_DOMAINS = frozenset({
    'bit.ly', 'bitly.com', 'tinyurl.com', 't.co', 'goo.gl', 'ow.ly',
    'is.gd', 'buff.ly', 'adf.ly', 'bl.ink', 'lnkd.in', 'rb.gy',
    'cutt.ly', 'shorturl.at', 'tiny.cc', 'v.gd', 'rebrand.ly', 'surl.li',
    'short.io', 'clck.ru', 'trib.al', 'dlvr.it', 'snip.ly', 't.ly',
    'tiny.one', 'shorte.st', 'bc.vc', 'ouo.io', 'soo.gd', 's.id',
    'qr.ae', 'po.st', 'x.co', 'mcaf.ee', 'su.pr', 'tr.im', 'cli.gs',
    'u.to', 'j.mp', 'db.tt', 'fb.me', 'youtu.be', 'amzn.to', 'wp.me',
    'lc.chat', 'shor.by', 'tinu.be', 'urlz.fr', 'y2u.be', 'gg.gg',
    'v.ht', 'qrco.de', 'rotf.lol', 'han.gl', 'me2.do', 'vo.la',
})


def _host(url: str) -> str:
    try:
        return (urlsplit(url).hostname or '').rstrip('.')
    except ValueError:
        return ''


def is_known_shortener(url: str) -> bool:
    """True if the URL's host is a known shortener or a subdomain of one."""
    host = _host(url)
    if not host:
        return False
    if host in SHORTENER_DOMAINS:
        return True
    return any(host.endswith('.' + domain) for domain in SHORTENER_DOMAINS)
