"""
Website fetching and text extraction for the screening pipeline.

Handles:
- Bounded-time page fetches through a shared httpx.AsyncClient
- Markup to visible-text conversion (BeautifulSoup)
- Website resolution across https / www variants
- Fixed-path subpage probing for investor sites
- Link discovery for client sites

Public fetch methods never raise: every failure is logged and returned as
None (or an empty list) so the caller can treat it as missing data.
"""

import asyncio
import re
from dataclasses import dataclass, field
from urllib.parse import urljoin, urlparse

import httpx
from bs4 import BeautifulSoup

from ..config import config
from ..errors import FetchError, wrap_fetch_error
from ..logging import get_logger

logger = get_logger(__name__)

# Likely investor pages, probed in order
INVESTOR_SUBPAGE_PATHS = [
    '/about',
    '/about-us',
    '/team',
    '/thesis',
    '/portfolio',
    '/investment-criteria',
    '/approach',
    '/strategy',
    '/focus',
    '/what-we-do',
    '/invest',
    '/faq',
]

# Path fragments that make a discovered client page worth fetching
USEFUL_PATH_MARKERS = (
    'about',
    'team',
    'product',
    'solution',
    'service',
    'technolog',
    'portfolio',
    'case',
    'customer',
    'partner',
    'industr',
    'application',
    'material',
    'feature',
    'platform',
    'pricing',
    'company',
)

MAX_DISCOVERED_PAGES = 10

_ASSET_PATTERN = re.compile(r'\.(jpg|jpeg|png|gif|svg|css|js|pdf|zip|mp4|webp|ico)$')
_STRIPPED_TAGS = ['title', 'script', 'style', 'nav', 'footer', 'header', 'noscript']
_WHITESPACE = re.compile(r'\s+')


@dataclass
class PageContent:
    """Visible text of one fetched page."""

    url: str
    title: str
    text: str
    html: str = field(default='', repr=False)


def parse_page(html: str, url: str, max_chars: int | None = None) -> tuple[str, str]:
    """
    Convert raw markup into a (title, text) pair.

    Script, style and page-chrome blocks are dropped, entities decoded,
    whitespace collapsed and the text truncated to ``max_chars``.
    """
    limit = max_chars or config.MAX_CONTENT_CHARS
    soup = BeautifulSoup(html, 'html.parser')

    title = url
    if soup.title and soup.title.string:
        title = soup.title.string.strip() or url

    for tag in soup(_STRIPPED_TAGS):
        tag.decompose()

    text = _WHITESPACE.sub(' ', soup.get_text(' ')).strip()
    return title, text[:limit]


def html_to_text(html: str, max_chars: int | None = None) -> str:
    """Visible text of an HTML document."""
    _, text = parse_page(html, '', max_chars)
    return text


def website_candidates(raw: str) -> list[str]:
    """
    URLs to try, in order, for a user-supplied website string.

    ``acme.vc`` -> ``https://acme.vc``, ``https://www.acme.vc``. Plain http URLs are
    tried over https first and as given last.
    """
    value = raw.strip()
    if not value:
        return []

    if not value.startswith(('http://', 'https://')):
        host = value.rstrip('/')
        if host.startswith('www.'):
            return [f'https://{host}']
        return [f'https://{host}', f'https://www.{host}']

    parsed = urlparse(value)
    secure = parsed._replace(scheme='https')
    candidates = [secure.geturl()]
    if parsed.netloc and not parsed.netloc.startswith('www.'):
        candidates.append(secure._replace(netloc=f'www.{parsed.netloc}').geturl())
    if parsed.scheme == 'http':
        candidates.append(value)
    return candidates


def discover_pages(base_url: str, html: str) -> list[str]:
    """
    Find same-site pages worth analysing from a homepage's links.

    Args:
        base_url: URL the markup was fetched from
        html: Homepage markup

    Returns:
        Up to MAX_DISCOVERED_PAGES absolute URLs (origin + path)
    """
    base = urlparse(base_url)
    if not base.scheme or not base.netloc:
        return []

    soup = BeautifulSoup(html, 'html.parser')
    urls: list[str] = []

    for anchor in soup.find_all('a', href=True):
        href = anchor['href'].strip()
        if not href or href.startswith(('#', 'mailto:', 'tel:', 'javascript:')):
            continue

        full = urlparse(urljoin(base_url, href))
        if full.scheme not in ('http', 'https'):
            continue
        if full.hostname != base.hostname:
            continue

        path = full.path.lower() or '/'
        if _ASSET_PATTERN.search(path):
            continue

        if path == '/' or any(marker in path for marker in USEFUL_PATH_MARKERS):
            url = f'{full.scheme}://{full.netloc}{full.path or "/"}'
            if url not in urls:
                urls.append(url)

    return urls[:MAX_DISCOVERED_PAGES]


class WebClient:
    """
    Async website fetcher shared by the investor and client pipelines.

    Each fetch is bounded by a hard wall-clock timeout; failures are not
    retried.
    """

    def __init__(
        self,
        timeout_seconds: float | None = None,
        max_chars: int | None = None,
        user_agent: str | None = None,
        subpage_batch_size: int | None = None,
        min_subpage_chars: int | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        """
        Initialize the web client.

        Args:
            timeout_seconds: Wall-clock limit per fetch (defaults to FETCH_TIMEOUT_SECONDS)
            max_chars: Truncation length for extracted text (defaults to MAX_CONTENT_CHARS)
            user_agent: User-Agent header (defaults to USER_AGENT)
            subpage_batch_size: Concurrent fetches per probing batch
            min_subpage_chars: Minimum text length for a probed page to count
            http_client: Pre-built httpx client (mainly for tests)
        """
        self.timeout_seconds = timeout_seconds or config.FETCH_TIMEOUT_SECONDS
        self.max_chars = max_chars or config.MAX_CONTENT_CHARS
        self.subpage_batch_size = subpage_batch_size or config.SUBPAGE_BATCH_SIZE
        self.min_subpage_chars = (
            min_subpage_chars if min_subpage_chars is not None else config.MIN_SUBPAGE_CHARS
        )
        self.headers = {
            'User-Agent': user_agent or config.USER_AGENT,
            'Accept': 'text/html,application/xhtml+xml',
        }

        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            follow_redirects=True,
            timeout=httpx.Timeout(self.timeout_seconds),
        )

    async def fetch_html(self, url: str) -> tuple[str, str]:
        """
        Fetch raw markup.

        Returns:
            Tuple of (final URL after redirects, response body)

        Raises:
            FetchError: On timeout, network failure or non-2xx status
        """
        try:
            response = await asyncio.wait_for(
                self._http.get(url, headers=self.headers),
                timeout=self.timeout_seconds,
            )
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL, asyncio.TimeoutError) as e:
            raise wrap_fetch_error(e, url) from e

        return str(response.url), response.text

    async def fetch_page(self, url: str) -> PageContent | None:
        """
        Fetch a page and extract its visible text.

        Returns:
            PageContent, or None if the page could not be fetched
        """
        try:
            final_url, html = await self.fetch_html(url)
        except FetchError as e:
            logger.info(
                'web.fetch_failed',
                url=url,
                error_type=type(e).__name__,
                status_code=e.context.get('status_code'),
            )
            return None

        title, text = parse_page(html, final_url, self.max_chars)
        return PageContent(url=final_url, title=title, text=text, html=html)

    async def resolve_website(self, website: str) -> PageContent | None:
        """
        Fetch the first reachable variant of a website.

        Args:
            website: Bare host or URL as entered by the user

        Returns:
            Homepage content, or None if no variant yields text
        """
        for candidate in website_candidates(website):
            page = await self.fetch_page(candidate)
            if page is not None and page.text:
                return page

        logger.info('web.website_unresolved', website=website)
        return None

    async def probe_investor_subpages(self, base_url: str) -> list[PageContent]:
        """
        Fetch the fixed list of likely investor pages under ``base_url``.

        Pages are fetched in small concurrent batches; placeholder pages
        (text not longer than min_subpage_chars) and redirects back to the
        homepage are dropped.
        """
        parsed = urlparse(base_url)
        origin = f'{parsed.scheme}://{parsed.netloc}'
        home = origin.rstrip('/') + '/'
        urls = [origin + path for path in INVESTOR_SUBPAGE_PATHS]

        pages: list[PageContent] = []
        seen: set[str] = {home, origin, base_url}

        for start in range(0, len(urls), self.subpage_batch_size):
            batch = urls[start:start + self.subpage_batch_size]
            results = await asyncio.gather(*(self.fetch_page(url) for url in batch))
            for page in results:
                if page is None or len(page.text) <= self.min_subpage_chars:
                    continue
                if page.url in seen:
                    continue
                seen.add(page.url)
                pages.append(page)

        logger.info('web.subpages_probed', base_url=base_url, found=len(pages))
        return pages

    async def fetch_site(self, website: str) -> list[PageContent]:
        """
        Fetch a client website: homepage plus discovered subpages.

        Returns:
            Fetched pages, homepage first; empty if the homepage is unreachable
        """
        homepage = await self.resolve_website(website)
        if homepage is None:
            return []

        urls = [
            url for url in discover_pages(homepage.url, homepage.html)
            if url.rstrip('/') != homepage.url.rstrip('/')
        ]
        results = await asyncio.gather(*(self.fetch_page(url) for url in urls))

        pages = [homepage]
        pages.extend(page for page in results if page is not None and page.text)
        logger.info('web.site_fetched', website=website, pages=len(pages))
        return pages

    async def close(self):
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self._http.aclose()
