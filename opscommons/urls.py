"""Helpers for building and opening URL strings."""

from __future__ import annotations

import subprocess
import sys
from collections.abc import Iterable, Mapping, Sequence
from urllib.parse import parse_qs, quote, quote_plus, unquote, urlencode, urlsplit

_PATH_SAFE = "$&+,/:;=@"
_FRAGMENT_SAFE = "$&+,/:;=?@!()*"

QueryValues = Mapping[str, "Sequence[str] | str"]


def _strip_slashes(text: str) -> str:
    return text.strip("/")


def _normalise_query(query: QueryValues | None) -> dict[str, list[str]]:
    if not query:
        return {}
    return {key: [values] if isinstance(values, str) else list(values) for key, values in query.items()}


def _merge_query(original: dict[str, list[str]], new: dict[str, list[str]]) -> dict[str, list[str]]:
    return {**original, **new}


def _encode_query(query: dict[str, list[str]]) -> str:
    pairs = [(key, value) for key in sorted(query) for value in query[key]]
    return urlencode(pairs, quote_via=quote_plus)


def format_url(
    base_url: str,
    path_parts: Iterable[str] = (),
    query: QueryValues | None = None,
    fragment: str = "",
) -> str:
    """Build a URL from a base, path parts, query values and a fragment.

    Everything is URI encoded, and leading or trailing slashes on the base and
    on each path part are handled. Query values given here override those
    already present in the base URL.
    """
    parsed = urlsplit(_strip_slashes(base_url))
    path = unquote(parsed.path)

    parts = [_strip_slashes(part) for part in path_parts]
    if parts:
        path = f"{_strip_slashes(path)}/{'/'.join(parts)}"

    original_query = parse_qs(parsed.query, keep_blank_values=True)
    raw_query = _encode_query(_merge_query(original_query, _normalise_query(query)))

    pieces: list[str] = []
    if parsed.scheme:
        pieces.append(f"{parsed.scheme}:")
    opaque = bool(parsed.scheme) and not parsed.netloc and path and not path.startswith("/")
    if opaque:
        pieces.append(parsed.path)
    else:
        if parsed.netloc or (parsed.scheme and path):
            pieces.append(f"//{parsed.netloc}")
        escaped_path = quote(path, safe=_PATH_SAFE)
        if escaped_path and not escaped_path.startswith("/") and parsed.netloc:
            pieces.append("/")
        pieces.append(escaped_path)
    if raw_query:
        pieces.append(f"?{raw_query}")
    if fragment:
        pieces.append(f"#{quote(fragment, safe=_FRAGMENT_SAFE)}")
    return "".join(pieces)


def open_url(url: str) -> None:
    """Open the URL in the user's browser using the platform's opener."""
    if sys.platform.startswith("linux"):
        command = ["xdg-open", url]
    elif sys.platform == "win32":
        command = ["rundll32", "url.dll,FileProtocolHandler", url]
    elif sys.platform == "darwin":
        command = ["open", url]
    else:
        raise OSError("unsupported platform")
    subprocess.Popen(command)