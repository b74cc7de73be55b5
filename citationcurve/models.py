from pydantic import BaseModel, ConfigDict, Field


class CitationObservation(BaseModel):
    """Citations a paper received in one calendar year.

    OpenAlex reports these as ``counts_by_year`` entries with a
    ``cited_by_count`` key; both that name and ``count`` are accepted.
    """
    model_config = ConfigDict(populate_by_name=True)

    year: int
    count: int = Field(..., ge=0, alias="cited_by_count")


class Series(BaseModel):
    """One paper's citation history as plotted on the chart."""
    label: str
    # Unordered; may be empty and may repeat a year
    observations: list[CitationObservation] = Field(default_factory=list)


class PaperRequest(BaseModel):
    """A paper requested by the caller, as carried in the encoded payload."""
    paper_label: str
    doi: str


class PaperData(BaseModel):
    """A requested paper together with its fetched citation history."""
    paper_label: str
    doi: str
    citations: list[CitationObservation] = Field(default_factory=list)
    total_citations: int = 0
    title: str | None = None

    def to_series(self) -> Series:
        return Series(label=self.paper_label, observations=self.citations)
