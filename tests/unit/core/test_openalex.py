"""Unit tests for the OpenAlex citation source."""

import pytest

import citationcurve.openalex as openalex
from citationcurve.models import CitationObservation, PaperRequest

pytestmark = pytest.mark.unit


class TestNormalizeDoi:
    """Tests for DOI prefix stripping."""

    @pytest.mark.parametrize(
        "doi",
        [
            "10.1109/CVPR.2016.90",
            "https://doi.org/10.1109/CVPR.2016.90",
            "http://doi.org/10.1109/CVPR.2016.90",
            "http://dx.doi.org/10.1109/CVPR.2016.90",
            "doi.org/10.1109/CVPR.2016.90",
            "  https://doi.org/10.1109/CVPR.2016.90 ",
        ],
    )
    def test_prefix_variants(self, doi):
        assert openalex.normalize_doi(doi) == "10.1109/CVPR.2016.90"


class TestParseCountsByYear:
    """Tests for reading counts_by_year from a work record."""

    def test_valid_record(self):
        work = {
            "id": "https://openalex.org/W1",
            "counts_by_year": [
                {"year": 2021, "cited_by_count": 12},
                {"year": 2020, "cited_by_count": 7},
            ],
        }

        result = openalex.parse_counts_by_year(work)

        assert result == [
            CitationObservation(year=2021, count=12),
            CitationObservation(year=2020, count=7),
        ]

    def test_missing_field(self):
        assert openalex.parse_counts_by_year({"id": "W1"}) == []

    def test_none_record(self):
        assert openalex.parse_counts_by_year(None) == []

    def test_malformed_entries(self):
        work = {"counts_by_year": [{"year": "soon", "cited_by_count": 3}]}
        assert openalex.parse_counts_by_year(work) == []

    def test_negative_count_rejected(self):
        work = {"counts_by_year": [{"year": 2020, "cited_by_count": -3}]}
        assert openalex.parse_counts_by_year(work) == []


class TestFetch:
    """Tests for fetching with the HTTP layer stubbed out."""

    async def test_fetch_citation_history_builds_url(self, monkeypatch):
        requested = []

        async def fake_make_request(_session, url, retries=3):
            requested.append(url)
            return {"counts_by_year": [{"year": 2022, "cited_by_count": 4}]}

        monkeypatch.setattr(openalex, "_make_request", fake_make_request)

        result = await openalex.fetch_citation_history(object(), "https://doi.org/10.1/abc")

        assert requested == ["https://api.openalex.org/works/https://doi.org/10.1/abc"]
        assert result == [CitationObservation(year=2022, count=4)]

    async def test_failed_request_yields_empty_history(self, monkeypatch):
        async def fake_make_request(_session, _url, retries=3):
            return None

        monkeypatch.setattr(openalex, "_make_request", fake_make_request)

        assert await openalex.fetch_citation_history(object(), "10.1/missing") == []

    async def test_fetch_papers_keeps_order_and_totals(self, monkeypatch):
        histories = {
            "10.1/a": [CitationObservation(year=2020, count=3), CitationObservation(year=2021, count=4)],
            "10.1/b": [],
        }

        async def fake_history(_session, doi):
            return histories[doi]

        monkeypatch.setattr(openalex, "fetch_citation_history", fake_history)

        papers = await openalex.fetch_papers(
            object(),
            [PaperRequest(paper_label="A", doi="10.1/a"), PaperRequest(paper_label="B", doi="10.1/b")],
        )

        assert [p.paper_label for p in papers] == ["A", "B"]
        assert papers[0].total_citations == 7
        assert papers[1].citations == []
        assert papers[1].total_citations == 0


class TestHeaders:
    """Tests for request headers."""

    def test_default_user_agent(self, monkeypatch):
        monkeypatch.setattr(openalex, "OPENALEX_EMAIL", "")
        assert openalex._build_headers()["User-Agent"] == openalex.DEFAULT_USER_AGENT

    def test_polite_pool_email(self, monkeypatch):
        monkeypatch.setattr(openalex, "OPENALEX_EMAIL", "me@example.org")
        assert openalex._build_headers()["User-Agent"] == "mailto:me@example.org"
