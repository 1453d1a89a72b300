"""Turn a spoken destination into a concrete URL."""

from __future__ import annotations

from dataclasses import dataclass
import ipaddress
import re
from urllib.parse import quote_plus, urlparse

from browser_controller.web_constants import (
    DEFAULT_SEARCH_ENGINE_URL,
    MAX_URL_LENGTH,
    POPULAR_SITES,
)

_DOMAIN_TOKEN = re.compile(r"^[\w-]+\.\w{2,}\S*$")
_DOMAIN_SUFFIX = re.compile(r"([\w.-]+\.(?:com|org|net|io|ai|dev))\b(\S*)", re.IGNORECASE)


@dataclass(frozen=True)
class NavigationResult:
    """Resolved URL plus the original input and the rule that produced it."""

    url: str
    input: str
    rule: str  # "direct_url" | "domain" | "known_site" | "domain_suffix" | "search"

    def to_dict(self) -> dict[str, str]:
        return {"url": self.url, "input": self.input, "rule": self.rule}


def resolve_navigation(
    raw_input: str,
    search_engine_url: str = DEFAULT_SEARCH_ENGINE_URL,
) -> NavigationResult:
    """Resolve user input into a browseable URL.

    Never fails: anything that is not a URL, a domain, or a known site
    becomes a search query.

    Args:
        raw_input: Transcribed destination ("github", "example.org", ...).
        search_engine_url: Search URL template with a {query} placeholder.

    Returns:
        NavigationResult with the URL and the cascade step that matched.
    """
    text = (raw_input or "").strip()

    # 1) Already an absolute web URL
    if _is_absolute_url(text):
        return NavigationResult(url=text, input=raw_input, rule="direct_url")

    # 2) www. prefix or a bare domain
    if text.lower().startswith("www.") or _DOMAIN_TOKEN.match(text):
        return NavigationResult(url=f"https://{text}", input=raw_input, rule="domain")

    # 3) Known site keyword, table order
    lowered = text.lower()
    for keyword, base_url in POPULAR_SITES:
        if keyword in lowered:
            return NavigationResult(url=base_url, input=raw_input, rule="known_site")

    # 4) Domain with a common suffix somewhere in the phrase
    suffix_match = _DOMAIN_SUFFIX.search(text)
    if suffix_match:
        domain = suffix_match.group(1) + suffix_match.group(2)
        return NavigationResult(
            url=f"https://{domain}", input=raw_input, rule="domain_suffix"
        )

    # 5) Search fallback
    url = search_engine_url.replace("{query}", quote_plus(text))
    return NavigationResult(url=url, input=raw_input, rule="search")


def resolve_navigation_url(
    raw_input: str,
    search_engine_url: str = DEFAULT_SEARCH_ENGINE_URL,
) -> str:
    """Return only the URL from resolve_navigation()."""
    return resolve_navigation(raw_input, search_engine_url).url


def is_safe_url(url: str | None, *, block_private_hosts: bool = False) -> bool:
    """Validate a URL before loading it in a tab.

    Checks:
    - URL exists and has reasonable length
    - Scheme is http or https (rejects javascript:, data:, file:, ...)
    - Has a hostname
    - Optionally, host is not loopback/private/link-local
    """
    if not url:
        return False
    if len(url) > MAX_URL_LENGTH:
        return False

    try:
        parsed = urlparse(url)
    except ValueError:
        return False

    if parsed.scheme not in ("http", "https"):
        return False

    hostname = parsed.hostname
    if not hostname:
        return False

    if not block_private_hosts:
        return True

    if hostname == "localhost":
        return False
    try:
        ip = ipaddress.ip_address(hostname)
    except ValueError:
        return True
    return not (ip.is_private or ip.is_loopback or ip.is_link_local)


def _is_absolute_url(text: str) -> bool:
    if not text or any(ch.isspace() for ch in text):
        return False
    try:
        parsed = urlparse(text)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)
