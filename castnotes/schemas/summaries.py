from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError


class TimestampedNote(BaseModel):
    timestamp: str = ""
    note: str = ""


class SummaryDocument(BaseModel):
    """
    Six categories of content derived from a transcript.

    Field names are camelCase on the wire. Each list is meant to hold 4-10
    items but nothing enforces it.
    """

    model_config = ConfigDict(populate_by_name=True)

    key_points: list[str] = Field(default_factory=list, alias="keyPoints")
    highlights: list[str] = Field(default_factory=list)
    timestamped_notes: list[TimestampedNote] = Field(default_factory=list, alias="timestampedNotes")
    tweet_thread: list[str] = Field(default_factory=list, alias="tweetThread")
    promo_captions: list[str] = Field(default_factory=list, alias="promoCaptions")
    seo_titles: list[str] = Field(default_factory=list, alias="seoTitles")

    @classmethod
    def empty(cls) -> SummaryDocument:
        return cls()

    @classmethod
    def from_payload(cls, payload: Any) -> tuple[SummaryDocument, list[str]]:
        """
        Build a document from a provider payload, one section at a time.

        A section with the wrong shape is left empty instead of discarding the
        rest. Returns the document and the wire names of the skipped sections.
        """
        if not isinstance(payload, dict):
            return cls.empty(), [field.alias or name for name, field in cls.model_fields.items()]

        sections: dict[str, Any] = {}
        skipped: list[str] = []
        for name, field in cls.model_fields.items():
            key = field.alias or name
            if key not in payload:
                continue
            try:
                sections[name] = _SECTION_ADAPTERS[name].validate_python(payload[key])
            except ValidationError:
                skipped.append(key)
        return cls(**sections), skipped

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


_SECTION_ADAPTERS: dict[str, TypeAdapter[Any]] = {
    name: TypeAdapter(field.annotation) for name, field in SummaryDocument.model_fields.items()
}


class SummarizeRequest(BaseModel):
    # Typed loosely so a wrong type reaches validate_transcript() and gets its message.
    transcript: Any = None
