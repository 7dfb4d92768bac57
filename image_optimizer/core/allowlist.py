"""Source host allow-list."""

from urllib.parse import urlparse


def is_domain_allowed(url: str, allowed_domains: str) -> bool:
    """
    `allowed_domains` is "*" (everything) or comma separated host suffixes.
    Suffix match is plain string matching on the hostname.
    """
    if allowed_domains.strip() == "*":
        return True

    try:
        hostname = urlparse(url).hostname
    except ValueError:
        return False
    if not hostname:
        return False

    for domain in allowed_domains.split(","):
        domain = domain.strip().lower()
        # Blank entries would match every host
        if domain and hostname.endswith(domain):
            return True
    return False
