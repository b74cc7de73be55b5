"""OpenAlex API client for per-year citation counts (async).

OpenAlex is a free, open catalog of the global research system.
API Documentation: https://docs.openalex.org/

Key field used:
- counts_by_year: list of {"year", "cited_by_count"} for the last decade

Any failure (HTTP error, timeout, unknown DOI, malformed body) resolves to
an empty history so the chart simply shows no data for that paper.
"""

import asyncio
import re
import weakref
from collections.abc import Sequence
from typing import Any

import aiohttp
from pydantic import ValidationError

from citationcurve.config import (
    OPENALEX_API_BASE,
    OPENALEX_EMAIL,
    OPENALEX_MAX_CONCURRENT,
    OPENALEX_RATE_LIMIT_DELAY,
    OPENALEX_TIMEOUT_SECONDS,
)
from citationcurve.logging import get_logger
from citationcurve.models import CitationObservation, PaperData, PaperRequest

logger = get_logger(__name__)

DOI_PREFIX = re.compile(r"^(https?://)?(dx\.)?doi\.org/", re.IGNORECASE)
DEFAULT_USER_AGENT = "mailto:citation-history-app@localhost"

_semaphores: weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, asyncio.Semaphore] = (
    weakref.WeakKeyDictionary()
)


def _get_openalex_semaphore() -> asyncio.Semaphore:
    """Return the rate-limiting semaphore bound to the running loop."""
    loop = asyncio.get_running_loop()
    semaphore = _semaphores.get(loop)
    if semaphore is None:
        semaphore = asyncio.Semaphore(OPENALEX_MAX_CONCURRENT)
        _semaphores[loop] = semaphore
    return semaphore


def _build_headers() -> dict[str, str]:
    """Build request headers, with email for the polite pool when configured."""
    user_agent = f"mailto:{OPENALEX_EMAIL}" if OPENALEX_EMAIL else DEFAULT_USER_AGENT
    return {"Accept": "application/json", "User-Agent": user_agent}


def normalize_doi(doi: str) -> str:
    """Strip URL prefixes so only the bare DOI remains.

    Handles:
    - https://doi.org/10.1000/xyz
    - http://dx.doi.org/10.1000/xyz
    - doi.org/10.1000/xyz
    - 10.1000/xyz
    """
    return DOI_PREFIX.sub("", doi.strip())


async def _make_request(
    session: aiohttp.ClientSession,
    url: str,
    retries: int = 3,
) -> dict[str, Any] | None:
    """Make an async HTTP request to the OpenAlex API with retry logic.

    Args:
        session: aiohttp ClientSession
        url: The API endpoint URL
        retries: Number of attempts before giving up

    Returns:
        Parsed JSON response or None on failure
    """
    async with _get_openalex_semaphore():
        await asyncio.sleep(OPENALEX_RATE_LIMIT_DELAY)

        for attempt in range(retries):
            try:
                timeout = aiohttp.ClientTimeout(total=OPENALEX_TIMEOUT_SECONDS)
                async with session.get(url, timeout=timeout) as response:
                    if response.status == 404:
                        logger.info("openalex_not_found", url=url)
                        return None
                    elif response.status == 429:
                        await asyncio.sleep((attempt + 1) * 2)
                        continue
                    elif response.status >= 400:
                        logger.warning("openalex_http_error", url=url, status=response.status, attempt=attempt)
                        if attempt < retries - 1:
                            await asyncio.sleep(1)
                        continue

                    return await response.json()
            except TimeoutError:
                logger.warning("openalex_timeout", url=url, attempt=attempt)
                if attempt < retries - 1:
                    await asyncio.sleep(1)
            except (aiohttp.ClientError, ValueError) as exc:
                logger.warning("openalex_request_failed", url=url, attempt=attempt, error=str(exc))
                if attempt < retries - 1:
                    await asyncio.sleep(1)

    return None


def parse_counts_by_year(work: dict[str, Any] | None) -> list[CitationObservation]:
    """Extract citation observations from an OpenAlex work record.

    Returns an empty list when the record or its ``counts_by_year`` field
    is missing or malformed.
    """
    if not isinstance(work, dict):
        return []

    counts = work.get("counts_by_year")
    if not isinstance(counts, list):
        return []

    try:
        return [CitationObservation.model_validate(entry) for entry in counts]
    except ValidationError as exc:
        logger.warning("openalex_malformed_counts", error_count=exc.error_count())
        return []


async def fetch_citation_history(
    session: aiohttp.ClientSession,
    doi: str,
) -> list[CitationObservation]:
    """Fetch per-year citation counts for a DOI.

    Args:
        session: aiohttp ClientSession
        doi: DOI, bare or as a doi.org URL

    Returns:
        Observations in OpenAlex order, or an empty list on any failure
    """
    clean_doi = normalize_doi(doi)
    url = f"{OPENALEX_API_BASE}/works/https://doi.org/{clean_doi}"

    work = await _make_request(session, url)
    if work is None:
        logger.info("citation_fetch_failed", doi=doi)
        return []

    return parse_counts_by_year(work)


async def fetch_paper(session: aiohttp.ClientSession, paper: PaperRequest) -> PaperData:
    citations = await fetch_citation_history(session, paper.doi)
    return PaperData(
        paper_label=paper.paper_label,
        doi=paper.doi,
        citations=citations,
        total_citations=sum(c.count for c in citations),
    )


async def fetch_papers(
    session: aiohttp.ClientSession,
    papers: Sequence[PaperRequest],
) -> list[PaperData]:
    """Fetch citation histories for several papers concurrently.

    Args:
        session: aiohttp ClientSession
        papers: Requested papers

    Returns:
        One PaperData per request, in request order
    """
    tasks = [fetch_paper(session, paper) for paper in papers]
    results = await asyncio.gather(*tasks)
    logger.info(
        "citations_fetched",
        papers=len(results),
        with_data=sum(1 for r in results if r.citations),
    )
    return list(results)


def create_session() -> aiohttp.ClientSession:
    """Create an aiohttp ClientSession with proper headers.

    Returns:
        Configured aiohttp ClientSession
    """
    return aiohttp.ClientSession(headers=_build_headers())
