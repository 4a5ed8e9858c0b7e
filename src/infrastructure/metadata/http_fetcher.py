"""HTTP metadata fetcher.

Pulls title, description and favicon out of a page with targeted regular
expressions rather than a full HTML parse. Each field is extracted on its
own and falls back to a fixed default, so a page that has a title but no
favicon link still keeps its title.

Defaults:
    title        the normalized URL
    description  empty string
    favicon      ``scheme://host/favicon.ico``
"""

import asyncio
import html
import re
from urllib.parse import urlsplit

import httpx
import structlog

from core.config import settings
from infrastructure.metadata.provider import PageMetadata

logger = structlog.get_logger()

_TITLE_RE = re.compile(r"<title[^>]*>(.*?)</title>", re.IGNORECASE | re.DOTALL)
_META_TAG_RE = re.compile(r"<meta\b[^>]*>", re.IGNORECASE)
_LINK_TAG_RE = re.compile(r"<link\b[^>]*>", re.IGNORECASE)
_ATTR_RE = re.compile(
    r"""([a-zA-Z_:.-]+)\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'=<>`]+))"""
)

_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")
_ICON_RELS = frozenset({"icon", "shortcut icon"})
_ABSOLUTE_PREFIXES = ("http://", "https://", "data:")


class EnrichmentError(Exception):
    """The page could not be retrieved. Never leaves this module."""


def normalize_url(url: str) -> str:
    """Trim the input and default to https when no scheme was given.

    An explicit scheme is kept even when it is not http(s); such URLs fail
    to fetch and get the default metadata.
    """
    url = url.strip()
    if not _SCHEME_RE.match(url):
        url = f"https://{url}"
    return url


def _attributes(tag: str) -> dict[str, str]:
    attrs: dict[str, str] = {}
    for name, double, single, bare in _ATTR_RE.findall(tag):
        attrs.setdefault(name.lower(), double or single or bare)
    return attrs


def extract_title(document: str) -> str | None:
    """Text of the first <title> element."""
    match = _TITLE_RE.search(document)
    if not match:
        return None
    title = html.unescape(match.group(1)).strip()
    return title or None


def extract_description(document: str) -> str | None:
    """Content of the first <meta name="description"> element."""
    for tag in _META_TAG_RE.findall(document):
        attrs = _attributes(tag)
        if attrs.get("name", "").lower() == "description" and "content" in attrs:
            description = html.unescape(attrs["content"]).strip()
            return description or None
    return None


def extract_favicon_href(document: str) -> str | None:
    """Raw href of the first icon or shortcut icon <link> element."""
    for tag in _LINK_TAG_RE.findall(document):
        attrs = _attributes(tag)
        rel = " ".join(attrs.get("rel", "").lower().split())
        href = html.unescape(attrs.get("href", "")).strip()
        if rel in _ICON_RELS and href:
            return href
    return None


def site_root(url: str) -> str | None:
    """``scheme://host[:port]`` of a URL, or None if it has no usable host."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return None
    if not parts.scheme or not parts.netloc:
        return None
    host = parts.netloc.rpartition("@")[2]
    return f"{parts.scheme}://{host}"


def resolve_favicon(href: str | None, url: str) -> str | None:
    """Turn a favicon href found on ``url`` into an absolute URL."""
    root = site_root(url)
    if href is None:
        return f"{root}/favicon.ico" if root else None
    if root is None or href.lower().startswith(_ABSOLUTE_PREFIXES):
        return href
    if href.startswith("//"):
        return f"{urlsplit(url).scheme}:{href}"
    if href.startswith("/"):
        return f"{root}{href}"
    return f"{root}/{href}"


def build_metadata(url: str, document: str | None) -> PageMetadata:
    """Merge whatever could be extracted from ``document`` with the defaults."""
    title = description = href = None
    if document:
        title = extract_title(document)
        description = extract_description(document)
        href = extract_favicon_href(document)

    return PageMetadata(
        url=url,
        title=title or url,
        description=description or "",
        favicon=resolve_favicon(href, url),
    )


class HttpMetadataFetcher:
    """Fetches pages with httpx and scrapes their display metadata."""

    def __init__(
        self,
        timeout: float = settings.metadata_fetch_timeout,
        max_bytes: int = settings.metadata_max_bytes,
        user_agent: str = settings.metadata_user_agent,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout = timeout
        self._max_bytes = max_bytes
        self._user_agent = user_agent
        self._transport = transport

    async def fetch(self, url: str) -> PageMetadata:
        """Fetch ``url`` and build its metadata; failures yield the defaults."""
        normalized = normalize_url(url)
        document: str | None = None
        try:
            document = await asyncio.wait_for(
                self._download(normalized), timeout=self._timeout
            )
        except TimeoutError:
            logger.warning("metadata_fetch_timeout", url=normalized, timeout=self._timeout)
        except EnrichmentError as exc:
            logger.warning("metadata_fetch_failed", url=normalized, error=str(exc))

        return build_metadata(normalized, document)

    async def _download(self, url: str) -> str:
        """GET the page and return at most ``max_bytes`` of its decoded body."""
        body = bytearray()
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                follow_redirects=True,
                headers={"User-Agent": self._user_agent},
                transport=self._transport,
            ) as client:
                async with client.stream("GET", url) as response:
                    if not response.is_success:
                        raise EnrichmentError(f"HTTP {response.status_code}")
                    async for chunk in response.aiter_bytes():
                        body.extend(chunk)
                        if len(body) >= self._max_bytes:
                            break
                    encoding = response.encoding or "utf-8"
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise EnrichmentError(str(exc) or type(exc).__name__) from exc

        raw = bytes(body[: self._max_bytes])
        try:
            return raw.decode(encoding, errors="replace")
        except LookupError:
            return raw.decode("utf-8", errors="replace")
