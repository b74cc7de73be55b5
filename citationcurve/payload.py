"""Request payload and query parameter parsing.

Embed and image URLs carry the papers to plot as a base64-encoded JSON
array of ``{"paper_label", "doi"}`` objects in the ``data`` parameter,
alongside ``log``, ``align``, ``cum`` and ``legend`` flags.
"""

from __future__ import annotations

import base64
import binascii
import json
from collections.abc import Mapping, Sequence

from pydantic import TypeAdapter, ValidationError

from citationcurve.chart.models import (
    AggregationMode,
    AlignmentMode,
    ChartOptions,
    LegendPosition,
    ValueTransform,
)
from citationcurve.models import PaperRequest

_papers_adapter = TypeAdapter(list[PaperRequest])


class PayloadError(ValueError):
    """The encoded papers payload could not be decoded."""


def decode_papers_payload(encoded: str | None) -> list[PaperRequest]:
    """Decode the ``data`` parameter into paper requests.

    Raises:
        PayloadError: If the payload is missing, not base64, not JSON,
            not an array, or holds invalid entries
    """
    if not encoded:
        raise PayloadError("No data provided")

    try:
        # Padding is optional in URLs
        padded = encoded + "=" * (-len(encoded) % 4)
        raw = base64.b64decode(padded, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise PayloadError("Invalid data encoding") from exc

    try:
        data = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise PayloadError("Invalid data encoding") from exc

    if not isinstance(data, list):
        raise PayloadError("Invalid input format. Expected an array of objects.")

    try:
        return _papers_adapter.validate_python(data)
    except ValidationError as exc:
        raise PayloadError(f"Invalid paper entries: {exc.error_count()} error(s)") from exc


def encode_papers_payload(papers: Sequence[PaperRequest]) -> str:
    """Encode paper requests for use in an embed or image URL."""
    raw = json.dumps([p.model_dump() for p in papers])
    return base64.b64encode(raw.encode("utf-8")).decode("ascii")


def _flag(params: Mapping[str, str], name: str) -> bool:
    return params.get(name) == "true"


def parse_chart_options(params: Mapping[str, str]) -> ChartOptions:
    """Map query parameters onto chart options.

    Flags are only on for the exact string ``"true"``; an unknown legend
    position falls back to the top.
    """
    legend_value = params.get("legend") or LegendPosition.TOP.value
    try:
        legend = LegendPosition(legend_value)
    except ValueError:
        legend = LegendPosition.TOP

    return ChartOptions(
        alignment=AlignmentMode.RELATIVE if _flag(params, "align") else AlignmentMode.CALENDAR,
        aggregation=AggregationMode.CUMULATIVE if _flag(params, "cum") else AggregationMode.RAW,
        value_transform=ValueTransform.LOG10 if _flag(params, "log") else ValueTransform.LINEAR,
        legend_position=legend,
    )
