# urlsigner/core/canonical.py
"""
URL canonicalization for signing.

A URL is split into its prefix (everything before '?'), an ordered list of
query pairs and an optional fragment. The prefix is kept byte-for-byte; the
query is re-encoded with urlencode so that signer and verifier always build
the same string from the same pairs.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Tuple
from urllib.parse import parse_qsl, urlencode, urlsplit

from .errors import MalformedURLError

EXPIRES = "expires"
SIGNATURE = "signature"
RESERVED = (EXPIRES, SIGNATURE)

Pair = Tuple[str, str]


@dataclass(frozen=True)
class CanonicalURL:
    prefix: str
    query: Tuple[Pair, ...] = field(default_factory=tuple)
    fragment: Optional[str] = None


def _check(url) -> None:
    if not isinstance(url, str):
        raise MalformedURLError(f"URL must be a string, got {type(url).__name__}")
    if not url:
        raise MalformedURLError("URL is empty")
    if any(c.isspace() or ord(c) < 0x20 or ord(c) == 0x7F for c in url):
        raise MalformedURLError(f"URL contains whitespace or control characters: {url!r}")
    try:
        parts = urlsplit(url)
        parts.port  # raises on a non-numeric / out of range port
    except ValueError as e:
        raise MalformedURLError(f"unparsable URL {url!r}: {e}") from None


def canonicalize(url: str) -> CanonicalURL:
    _check(url)
    head, hash_, fragment = url.partition("#")
    prefix, _, query = head.partition("?")
    try:
        pairs = parse_qsl(query, keep_blank_values=True, strict_parsing=False)
    except ValueError as e:
        raise MalformedURLError(f"unparsable query in {url!r}: {e}") from None
    return CanonicalURL(prefix=prefix, query=tuple(pairs), fragment=fragment if hash_ else None)


def _without(pairs: Iterable[Pair], names: Iterable[str]) -> Tuple[Pair, ...]:
    drop = set(names)
    return tuple((k, v) for k, v in pairs if k not in drop)


def strip_reserved(canonical: CanonicalURL) -> CanonicalURL:
    return CanonicalURL(canonical.prefix, _without(canonical.query, RESERVED), canonical.fragment)


def strip_param(canonical: CanonicalURL, name: str) -> CanonicalURL:
    return CanonicalURL(canonical.prefix, _without(canonical.query, (name,)), canonical.fragment)


def get_param(canonical: CanonicalURL, name: str) -> Optional[str]:
    for k, v in canonical.query:
        if k == name:
            return v
    return None


def count_param(canonical: CanonicalURL, name: str) -> int:
    return sum(1 for k, _ in canonical.query if k == name)


def with_param(canonical: CanonicalURL, name: str, value) -> CanonicalURL:
    """Set `name` to `value`: replaces the first occurrence in place, else appends."""
    value = str(value)
    out = []
    replaced = False
    for k, v in canonical.query:
        if k == name:
            if not replaced:
                out.append((k, value))
                replaced = True
            continue
        out.append((k, v))
    if not replaced:
        out.append((name, value))
    return CanonicalURL(canonical.prefix, tuple(out), canonical.fragment)


def serialize(canonical: CanonicalURL) -> str:
    url = canonical.prefix
    if canonical.query:
        url += "?" + urlencode(canonical.query)
    if canonical.fragment is not None:
        url += "#" + canonical.fragment
    return url
