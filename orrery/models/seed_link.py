"""Encode / decode the system seed in a URL query string.

A resolved seed is shared as ``?seed=<n>``.  Decoding treats a purely decimal
value that fits in 32 bits as that numeric seed, so opening a shared link
reproduces the exact system; anything else is a string seed to be hashed.
"""

from __future__ import annotations

from urllib.parse import parse_qs, urlencode, urlsplit, urlunsplit

from ..constants import SEED_MASK, SEED_QUERY_PARAM


def parse_seed_value(raw: str) -> int | str | None:
    """Numeric seed for 32-bit decimal text, string seed otherwise."""
    raw = raw.strip()
    if not raw:
        return None
    if raw.isascii() and raw.isdigit() and int(raw) <= SEED_MASK:
        return int(raw)
    return raw


def seed_from_query(url_or_query: str) -> int | str | None:
    """Extract the seed parameter; ``None`` when absent or empty."""
    query = urlsplit(url_or_query).query if "?" in url_or_query else url_or_query
    values = parse_qs(query, keep_blank_values=True).get(SEED_QUERY_PARAM)
    if not values:
        return None
    return parse_seed_value(values[0])


def share_query(seed: int) -> str:
    return "?" + urlencode({SEED_QUERY_PARAM: seed})


def share_url(base_url: str, seed: int) -> str:
    """``base_url`` with its seed parameter replaced, other params kept."""
    parts = urlsplit(base_url)
    params = [
        (key, value)
        for key, values in parse_qs(parts.query, keep_blank_values=True).items()
        if key != SEED_QUERY_PARAM
        for value in values
    ]
    params.append((SEED_QUERY_PARAM, str(seed)))
    return urlunsplit(parts._replace(query=urlencode(params)))
