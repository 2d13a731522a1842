"""Tabular export of analyses."""

import csv
import io

from claimlens.data import Analysis, Stance


def analysis_to_rows(analysis: Analysis) -> list[list[str]]:
    """One header row plus one row per claim with each outlet's stance.

    Outlets with no recorded stance on a claim read ``not_mentioned``.
    """
    domains = [source.domain for source in analysis.sources]
    rows = [["Claim", "Category", *domains]]
    for claim in analysis.claims:
        by_domain = {outlet.domain: outlet.stance for outlet in claim.outlets}
        rows.append(
            [
                claim.canonical_text,
                str(claim.category),
                *(str(by_domain.get(d, Stance.NOT_MENTIONED)) for d in domains),
            ]
        )
    return rows


def analysis_to_csv(analysis: Analysis) -> str:
    """Render an analysis as CSV text."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerows(analysis_to_rows(analysis))
    return buffer.getvalue()
