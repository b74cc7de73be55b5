"""Unit tests for the chart serving workflow."""

import pytest

import citationcurve.service as service
from citationcurve.chart.models import AlignmentMode, ChartOptions, LegendPosition
from citationcurve.models import CitationObservation, PaperData, PaperRequest
from citationcurve.payload import encode_papers_payload

pytestmark = pytest.mark.unit

PAPERS = [
    PaperRequest(paper_label="BERT", doi="10.18653/v1/N19-1423"),
    PaperRequest(paper_label="Unknown", doi="10.0/missing"),
]


async def _fake_load_papers(papers, _session=None):
    data = []
    for paper in papers:
        citations = []
        if paper.paper_label == "BERT":
            citations = [
                CitationObservation(year=2019, count=500),
                CitationObservation(year=2020, count=2500),
                CitationObservation(year=2021, count=4000),
            ]
        data.append(PaperData(
            paper_label=paper.paper_label,
            doi=paper.doi,
            citations=citations,
            total_citations=sum(c.count for c in citations),
        ))
    return data


async def test_missing_payload_renders_message():
    result = await service.render_chart(None, {})

    assert result.error == service.NO_DATA_MESSAGE
    assert "No data provided" in result.svg
    assert result.description is None


async def test_invalid_payload_renders_message():
    result = await service.render_chart("%%%", {})

    assert result.error == service.INVALID_DATA_MESSAGE
    assert "Invalid Data" in result.svg


async def test_render_chart_composes_and_renders(monkeypatch):
    monkeypatch.setattr(service, "load_papers", _fake_load_papers)

    result = await service.render_chart(
        encode_papers_payload(PAPERS),
        {"legend": "bottom", "cum": "true"},
    )

    assert result.error is None
    assert result.description.ready is True
    assert result.description.legend_position == LegendPosition.BOTTOM
    assert [p.paper_label for p in result.papers] == ["BERT", "Unknown"]
    assert result.svg.startswith("<svg")
    assert result.description.series_paths[0].d in result.svg
    # The paper without data still gets a legend entry
    assert [e.label for e in result.description.legend] == ["BERT", "Unknown"]


async def test_explicit_options_override_params(monkeypatch):
    monkeypatch.setattr(service, "load_papers", _fake_load_papers)

    result = await service.render_chart(
        encode_papers_payload(PAPERS),
        {"align": "false"},
        options=ChartOptions(alignment=AlignmentMode.RELATIVE),
    )

    assert result.description.x_domain == (0, 2)
    assert "Relative Years" in result.svg


async def test_failure_renders_error_image(monkeypatch):
    async def failing_load_papers(_papers, _session=None):
        raise RuntimeError("boom")

    monkeypatch.setattr(service, "load_papers", failing_load_papers)

    result = await service.render_chart(encode_papers_payload(PAPERS), {})

    assert result.error.startswith("Error generating chart")
    assert 'fill="red"' in result.svg


async def test_build_chart_from_payload(monkeypatch):
    async def fake_fetch_papers(_session, papers):
        return await _fake_load_papers(papers)

    monkeypatch.setattr(service, "fetch_papers", fake_fetch_papers)

    chart = await service.build_chart_from_payload(
        encode_papers_payload(PAPERS),
        {"log": "true"},
        session=object(),
    )

    assert chart.axis_titles.y == "Log Citations"
    assert chart.x_domain == (2019, 2021)


async def test_load_series_uses_given_session(monkeypatch):
    seen = []

    async def fake_fetch_papers(session, papers):
        seen.append(session)
        return await _fake_load_papers(papers)

    monkeypatch.setattr(service, "fetch_papers", fake_fetch_papers)
    session = object()

    series = await service.load_series(PAPERS, session)

    assert seen == [session]
    assert [s.label for s in series] == ["BERT", "Unknown"]
    assert series[1].observations == []
