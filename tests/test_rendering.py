from __future__ import annotations

import pytest

from castnotes.rendering import SECTION_KEYS, copy_text, render_markdown
from castnotes.schemas.summaries import SummaryDocument


@pytest.fixture()
def summary(sample_summary) -> SummaryDocument:
    return SummaryDocument.model_validate(sample_summary)


def test_copy_text_joins_lists_by_line(summary) -> None:
    assert copy_text(summary, "keyPoints") == (
        "Pricing drives churn\nOnboarding is too long\nSupport is a moat\nShip weekly"
    )


def test_copy_text_separates_thread_posts_with_blank_lines(summary) -> None:
    assert copy_text(summary, "tweetThread").split("\n\n")[:2] == [
        "1/ How one startup halved churn",
        "2/ Shorter onboarding",
    ]


def test_copy_text_formats_timestamped_notes(summary) -> None:
    assert copy_text(summary, "timestampedNotes").splitlines()[0] == "00:45 — Guest intro"


def test_copy_text_rejects_unknown_section(summary) -> None:
    with pytest.raises(ValueError):
        copy_text(summary, "showNotes")


def test_every_section_has_a_copy_format(summary) -> None:
    for key in SECTION_KEYS:
        assert copy_text(summary, key)


def test_render_markdown_lists_all_sections(summary) -> None:
    text = render_markdown("Hello there.", summary)

    assert text.startswith("## Transcript\n\nHello there.\n")
    for title in ("Key Points", "Highlights", "Tweet Thread", "Promo Captions", "SEO Titles", "Timestamped Notes"):
        assert f"### {title}" in text
    assert "1. 1/ How one startup halved churn" in text
    assert "- `[05:10]` Pricing experiments" in text


def test_render_markdown_marks_empty_sections() -> None:
    text = render_markdown("", SummaryDocument.empty())

    assert "## Transcript" not in text
    assert text.count("_None_") == 6


def test_summary_document_accepts_snake_case_names() -> None:
    doc = SummaryDocument(seo_titles=["A title"])

    assert doc.to_payload()["seoTitles"] == ["A title"]


def test_from_payload_keeps_sections_that_fit(sample_summary) -> None:
    summary, skipped = SummaryDocument.from_payload({**sample_summary, "highlights": "not a list", "extra": 1})

    assert skipped == ["highlights"]
    assert summary.highlights == []
    assert summary.key_points == sample_summary["keyPoints"]
    assert summary.timestamped_notes[0].note == "Guest intro"


def test_from_payload_rejects_non_objects() -> None:
    summary, skipped = SummaryDocument.from_payload(["keyPoints"])

    assert summary == SummaryDocument.empty()
    assert len(skipped) == len(SECTION_KEYS)
