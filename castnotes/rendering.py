from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from castnotes.schemas.summaries import SummaryDocument, TimestampedNote


@dataclass(frozen=True)
class Section:
    key: str
    title: str
    attribute: str
    numbered: bool = False


# Display order of the results view.
SECTIONS: tuple[Section, ...] = (
    Section("keyPoints", "Key Points", "key_points"),
    Section("highlights", "Highlights", "highlights"),
    Section("tweetThread", "Tweet Thread", "tweet_thread", numbered=True),
    Section("promoCaptions", "Promo Captions", "promo_captions"),
    Section("seoTitles", "SEO Titles", "seo_titles"),
    Section("timestampedNotes", "Timestamped Notes", "timestamped_notes"),
)
SECTION_KEYS = tuple(section.key for section in SECTIONS)


def format_note(note: TimestampedNote) -> str:
    return f"{note.timestamp} — {note.note}"


_COPY_FORMATTERS: dict[str, Callable[[SummaryDocument], str]] = {
    "keyPoints": lambda doc: "\n".join(doc.key_points),
    "highlights": lambda doc: "\n".join(doc.highlights),
    "tweetThread": lambda doc: "\n\n".join(doc.tweet_thread),
    "promoCaptions": lambda doc: "\n".join(doc.promo_captions),
    "seoTitles": lambda doc: "\n".join(doc.seo_titles),
    "timestampedNotes": lambda doc: "\n".join(format_note(note) for note in doc.timestamped_notes),
}


def copy_text(summary: SummaryDocument, section_key: str) -> str:
    """Plain text for one section, as it would go to the clipboard."""

    try:
        formatter = _COPY_FORMATTERS[section_key]
    except KeyError:
        raise ValueError(f"Unknown section: {section_key}") from None
    return formatter(summary)


def _section_items(summary: SummaryDocument, section: Section) -> list[str]:
    if section.key == "timestampedNotes":
        return [f"`[{note.timestamp}]` {note.note}" for note in summary.timestamped_notes]
    return list(getattr(summary, section.attribute))


def render_markdown(transcript: str | None, summary: SummaryDocument | None) -> str:
    lines: list[str] = []
    if transcript:
        lines += ["## Transcript", "", transcript, ""]

    if summary is not None:
        lines += ["## Results", ""]
        for section in SECTIONS:
            lines += [f"### {section.title}", ""]
            items = _section_items(summary, section)
            if not items:
                lines += ["_None_", ""]
                continue
            for index, item in enumerate(items, start=1):
                lines.append(f"{index}. {item}" if section.numbered else f"- {item}")
            lines.append("")

    return "\n".join(lines).rstrip() + "\n" if lines else ""
