from __future__ import annotations

from urllib.parse import urljoin, urlsplit


def has_scheme(url: str) -> bool:
    return bool(urlsplit((url or "").strip()).scheme)


def resolve_resource_url(href: str, base_url: str) -> str:
    value = (href or "").strip()
    if has_scheme(value):
        return value
    return urljoin(base_url.rstrip("/") + "/", value)
