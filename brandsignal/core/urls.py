"""URL resolution and the asset reference rewriter.

Every URL-valued field of a SiteSignal goes through ``proxy_url`` so that
consumers never need cross-origin access. Pure functions, no I/O.
"""

from __future__ import annotations

from urllib.parse import parse_qs, quote, urljoin, urlparse

DEFAULT_PROXY_PATH = "/api/proxy-image"

# Characters encodeURIComponent leaves untouched (besides alphanumerics and "_.-~").
_URI_COMPONENT_SAFE = "!*'()"


def is_inline_reference(url: str | None) -> bool:
    """Check if a reference is an inline data URI."""
    if not url:
        return False
    return url.strip().lower().startswith("data:")


def is_absolute_http_url(url: str | None) -> bool:
    """Check if a string is an absolute HTTP/HTTPS URL with a host."""
    if not url:
        return False
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def resolve_url(base_url: str, reference: str | None) -> str | None:
    """Resolve a possibly relative reference against the base URL.

    Inline data references are returned unchanged. Returns None when the
    reference is empty or does not resolve to an absolute http(s) URL.
    """
    if not reference:
        return None
    reference = reference.strip()
    if not reference:
        return None
    if is_inline_reference(reference):
        return reference
    try:
        resolved = urljoin(base_url, reference)
    except ValueError:
        return None
    if not is_absolute_http_url(resolved):
        return None
    return resolved


def extract_hostname(url: str) -> str:
    """Return the lowercase hostname of a URL, or an empty string."""
    try:
        return (urlparse(url).hostname or "").lower()
    except ValueError:
        return ""


def normalize_input_url(url: str) -> str:
    """Prefix bare domains with https:// the way users type them."""
    url = url.strip()
    if url.lower().startswith(("http://", "https://")):
        return url
    return f"https://{url}"


def proxy_url(url: str | None, proxy_path: str = DEFAULT_PROXY_PATH) -> str | None:
    """Rewrite a remote URL into a same-origin proxied reference.

    None stays None and inline data references pass through unchanged.
    """
    if not url:
        return None
    if is_inline_reference(url):
        return url
    return f"{proxy_path}?url={quote(url, safe=_URI_COMPONENT_SAFE)}"


def is_proxied_reference(value: str, proxy_path: str = DEFAULT_PROXY_PATH) -> bool:
    """Check if a value is a reference produced by ``proxy_url``."""
    return value.startswith(f"{proxy_path}?url=")


def unproxy_url(value: str, proxy_path: str = DEFAULT_PROXY_PATH) -> str | None:
    """Recover the original remote URL from a proxied reference."""
    if not is_proxied_reference(value, proxy_path):
        return None
    query = value[len(proxy_path) + 1 :]
    targets = parse_qs(query).get("url")
    return targets[0] if targets else None
