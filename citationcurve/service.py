"""Core service layer for serving citation charts.

This module wires the request payload, the OpenAlex citation source and
the chart engine together without any HTTP framework dependency. It
returns plain data structures (SVG markup and the chart description)
that an API route or an image endpoint can forward as-is.
"""

from collections.abc import Mapping, Sequence

import aiohttp
from pydantic import BaseModel, Field

from citationcurve.chart import build_chart, render_message_svg, render_svg
from citationcurve.chart.models import ChartDescription, ChartOptions
from citationcurve.config import DEBUG
from citationcurve.logging import get_logger, request_context
from citationcurve.models import PaperData, PaperRequest, Series
from citationcurve.openalex import create_session, fetch_papers
from citationcurve.payload import PayloadError, decode_papers_payload, parse_chart_options

logger = get_logger(__name__)

NO_DATA_MESSAGE = "No data provided"
INVALID_DATA_MESSAGE = "Invalid Data"


class RenderedChart(BaseModel):
    """Outcome of serving one chart image request."""
    svg: str
    description: ChartDescription | None = None
    papers: list[PaperData] = Field(default_factory=list)
    error: str | None = None


async def load_papers(
    papers: Sequence[PaperRequest],
    session: aiohttp.ClientSession | None = None,
) -> list[PaperData]:
    """Fetch citation histories, opening a session when none is given."""
    if session is not None:
        return await fetch_papers(session, papers)
    async with create_session() as owned:
        return await fetch_papers(owned, papers)


async def load_series(
    papers: Sequence[PaperRequest],
    session: aiohttp.ClientSession | None = None,
) -> list[Series]:
    data = await load_papers(papers, session)
    return [paper.to_series() for paper in data]


async def build_chart_from_payload(
    encoded: str | None,
    params: Mapping[str, str],
    session: aiohttp.ClientSession | None = None,
) -> ChartDescription:
    """Decode, fetch and compose, without rendering.

    Raises:
        PayloadError: If the encoded payload is missing or invalid
    """
    papers = decode_papers_payload(encoded)
    options = parse_chart_options(params)
    series = await load_series(papers, session)
    return build_chart(series, options)


async def render_chart(
    encoded: str | None,
    params: Mapping[str, str],
    session: aiohttp.ClientSession | None = None,
    options: ChartOptions | None = None,
) -> RenderedChart:
    """Serve one chart image request.

    A missing or undecodable payload is answered with a message image
    rather than an exception, matching what the embed page shows.

    Args:
        encoded: Base64 JSON array of {paper_label, doi}
        params: Remaining query parameters (log, align, cum, legend)
        session: Optional shared aiohttp session
        options: Overrides the options parsed from params

    Returns:
        RenderedChart with SVG markup
    """
    if not encoded:
        return RenderedChart(svg=render_message_svg(NO_DATA_MESSAGE), error=NO_DATA_MESSAGE)

    try:
        papers = decode_papers_payload(encoded)
    except PayloadError as exc:
        logger.info("payload_rejected", reason=str(exc))
        return RenderedChart(svg=render_message_svg(INVALID_DATA_MESSAGE), error=INVALID_DATA_MESSAGE)

    options = options or parse_chart_options(params)

    with request_context(
        papers=len(papers),
        alignment=options.alignment.value,
        aggregation=options.aggregation.value,
        transform=options.value_transform.value,
    ):
        try:
            data = await load_papers(papers, session)
            description = build_chart([paper.to_series() for paper in data], options)
        except Exception as exc:
            logger.exception("chart_render_failed")
            message = "Error generating chart"
            if DEBUG:
                message = f"{message}: {exc}"
            return RenderedChart(svg=render_message_svg(message, color="red"), error=message)

        logger.info("chart_rendered", series=len(description.series_paths), dots=len(description.dots))

    return RenderedChart(svg=render_svg(description), description=description, papers=data)
