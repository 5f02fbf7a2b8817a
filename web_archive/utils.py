# File: web_archive/utils.py
"""web_archive.utils: Разрешение относительных ссылок и нормализация URL."""

from __future__ import annotations

import re
from typing import Sequence
from urllib.parse import SplitResult, quote, urljoin, urlsplit, urlunsplit

from web_archive.errors import ResolveError
from web_archive.logger import logger

__all__: Sequence[str] = (
    "SPECIAL_SCHEMES",
    "resolve_url",
    "normalize_base_url",
    "is_http_url",
)

#: Schemes that must carry a non-empty host.
SPECIAL_SCHEMES = frozenset({"http", "https", "ftp", "ws", "wss"})
#: Schemes whose references treat a backslash as a path separator.
BACKSLASH_SCHEMES = SPECIAL_SCHEMES | {"file"}

_SCHEME_RE = re.compile(r"^[a-z][a-z0-9+.\-]*$")
_LEADING_SCHEME_RE = re.compile(r"^([a-zA-Z][a-zA-Z0-9+.\-]*):")
_FORBIDDEN_HOST_RE = re.compile(r"[\x00-\x20#%/<>?@\\^|\[\]\x7f]")
_STRIP_CHARS = " \t\n\r\f"
_PATH_SAFE = "/%:@!$&'()*+,;=-._~"
_QUERY_SAFE = _PATH_SAFE + "?"


def _clean_reference(reference: str) -> str:
    """Обрезает пробельные символы по краям и удаляет табы/переводы строк внутри."""
    return reference.strip(_STRIP_CHARS).replace("\t", "").replace("\n", "").replace("\r", "")


def _slashes_to_separators(base: str, reference: str) -> str:
    """Заменяет ``\\`` на ``/`` до начала query/fragment для http-подобных схем."""
    match = _LEADING_SCHEME_RE.match(reference) or _LEADING_SCHEME_RE.match(base)
    if match is None or match.group(1).lower() not in BACKSLASH_SCHEMES:
        return reference
    cut = len(reference)
    for marker in "?#":
        index = reference.find(marker)
        if index != -1:
            cut = min(cut, index)
    return reference[:cut].replace("\\", "/") + reference[cut:]


def _normalize(parts: SplitResult) -> str:
    scheme = parts.scheme.lower()
    if scheme not in SPECIAL_SCHEMES:
        return urlunsplit((scheme, parts.netloc, parts.path, parts.query, parts.fragment))

    userinfo, sep, hostport = parts.netloc.rpartition("@")
    netloc = f"{userinfo}{sep}{hostport.lower()}"
    path = quote(parts.path or "/", safe=_PATH_SAFE)
    query = quote(parts.query, safe=_QUERY_SAFE)
    return urlunsplit((scheme, netloc, path, query, parts.fragment))


def resolve_url(base: str, reference: str) -> str:
    """Разрешает ``reference`` относительно ``base`` и возвращает абсолютный URL.

    Абсолютная ссылка обрабатывается тем же путём и просто игнорирует ``base``.
    Бросает :class:`ResolveError`, если результат не является корректным URL.
    """
    cleaned = _slashes_to_separators(base, _clean_reference(reference))
    try:
        joined = urljoin(base, cleaned)
        parts = urlsplit(joined)
        # .port валидирует номер порта и бросает ValueError
        parts.port
    except ValueError as exc:
        raise ResolveError(reference, str(exc)) from exc

    if not parts.scheme or not _SCHEME_RE.match(parts.scheme.lower()):
        raise ResolveError(reference, "relative URL without a base")

    if parts.scheme.lower() in SPECIAL_SCHEMES:
        host = parts.hostname or ""
        if not host:
            raise ResolveError(reference, "empty host")
        if _FORBIDDEN_HOST_RE.search(host):
            raise ResolveError(reference, f"invalid host {host!r}")

    resolved = _normalize(parts)
    logger.debug("Resolved %r against %s -> %s", reference, base, resolved)
    return resolved


def normalize_base_url(url: str) -> str:
    """Проверяет и нормализует абсолютный URL страницы (без базового URL)."""
    return resolve_url("", url)


def is_http_url(url: str) -> bool:
    """True, если URL можно скачать по HTTP(S)."""
    return urlsplit(url).scheme in ("http", "https")
