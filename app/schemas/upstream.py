"""
Schemas for the Gemini generateContent response.

Nothing in the upstream shape is guaranteed, so every level is optional and
every accessor below handles the missing branch itself. Unknown fields are
ignored. A payload that contradicts these types (e.g. candidates not a list)
fails validation and is treated as malformed by the caller.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class _UpstreamModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class WebSource(_UpstreamModel):
    uri: Optional[str] = None
    title: Optional[str] = None


class GroundingAttribution(_UpstreamModel):
    web: Optional[WebSource] = None


class GroundingMetadata(_UpstreamModel):
    grounding_attributions: Optional[list[Optional[GroundingAttribution]]] = Field(
        None, alias="groundingAttributions"
    )
    # Newer responses carry the cited pages here instead; same {web: {uri, title}} shape.
    grounding_chunks: Optional[list[Optional[GroundingAttribution]]] = Field(None, alias="groundingChunks")

    def web_sources(self) -> list[WebSource]:
        """Web entries that have both a uri and a title, attributions first, chunks as fallback."""
        for entries in (self.grounding_attributions, self.grounding_chunks):
            found = [
                entry.web
                for entry in entries or []
                if entry is not None and entry.web is not None and entry.web.uri and entry.web.title
            ]
            if found:
                return found
        return []


class Part(_UpstreamModel):
    text: Optional[str] = None


class Content(_UpstreamModel):
    parts: Optional[list[Optional[Part]]] = None


class Candidate(_UpstreamModel):
    content: Optional[Content] = None
    grounding_metadata: Optional[GroundingMetadata] = Field(None, alias="groundingMetadata")

    def first_text(self) -> str | None:
        if self.content is None or not self.content.parts:
            return None
        part = self.content.parts[0]
        if part is None or not part.text:
            return None
        return part.text


class GenerateContentResponse(_UpstreamModel):
    candidates: Optional[list[Optional[Candidate]]] = None
    grounding_metadata: Optional[GroundingMetadata] = Field(None, alias="groundingMetadata")

    def first_candidate(self) -> Candidate | None:
        if not self.candidates:
            return None
        return self.candidates[0]

    def first_text(self) -> str | None:
        """Text of the first candidate's first part, or None if any level is missing or empty."""
        candidate = self.first_candidate()
        return candidate.first_text() if candidate is not None else None

    def web_sources(self) -> list[WebSource]:
        """Grounding web sources, read from the first candidate, else from the top level."""
        candidate = self.first_candidate()
        if candidate is not None and candidate.grounding_metadata is not None:
            sources = candidate.grounding_metadata.web_sources()
            if sources:
                return sources
        if self.grounding_metadata is not None:
            return self.grounding_metadata.web_sources()
        return []
