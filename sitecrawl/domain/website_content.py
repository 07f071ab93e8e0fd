from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class WebsiteContent:
    """Extracted snapshot of a single page."""

    title: str = ""
    text: str = ""
    images: tuple[str, ...] = ()
    metadata: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "text": self.text,
            "images": list(self.images),
            "metadata": dict(self.metadata),
        }
