"""Status record models published for status bars."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class StatusClass(str, Enum):
    """Canonical lifecycle classes written to the ``class`` field."""
    INACTIVE = "inactive"
    ACTIVE = "active"
    PROCESSING = "processing"
    ERROR = "error"


MIC_OFF_GLYPH = "󰍭"
MIC_ON_GLYPH = "󰍬"

STATUS_GLYPHS = {
    StatusClass.INACTIVE: MIC_OFF_GLYPH,
    StatusClass.ACTIVE: MIC_ON_GLYPH,
    StatusClass.PROCESSING: MIC_ON_GLYPH,
    StatusClass.ERROR: MIC_OFF_GLYPH,
}

TOOLTIP_READY = "Ready"
TOOLTIP_NOT_RUNNING = "Not running"

STATUS_TOOLTIPS = {
    StatusClass.ACTIVE: "Recording...",
    StatusClass.PROCESSING: "Transcribing...",
}


def tooltip_for(status_class: StatusClass, message: Optional[str] = None,
                running: bool = True) -> str:
    """Derive the tooltip for a class.

    Inactive has two variants: "Ready" while the daemon runs and
    "Not running" once it has shut down. Error embeds its message.
    """
    if status_class == StatusClass.INACTIVE:
        return TOOLTIP_READY if running else TOOLTIP_NOT_RUNNING
    if status_class == StatusClass.ERROR:
        return f"Error: {message if message is not None else ''}"
    return STATUS_TOOLTIPS[status_class]


class StatusRecord(BaseModel):
    """The single current status document (``status.json``).

    Field order matches the on-disk layout consumed by Waybar modules:
    text, tooltip, class, alt.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    text: str
    tooltip: str
    status_class: StatusClass = Field(alias="class")
    alt: str

    @model_validator(mode="after")
    def _alt_matches_class(self) -> "StatusRecord":
        if self.alt != self.status_class.value:
            raise ValueError(f"alt '{self.alt}' does not match class '{self.status_class.value}'")
        return self

    @classmethod
    def derive(cls, status_class: StatusClass, message: Optional[str] = None,
               running: bool = True) -> "StatusRecord":
        """Build the record for a state; text, tooltip and alt follow from it."""
        return cls(
            text=STATUS_GLYPHS[status_class],
            tooltip=tooltip_for(status_class, message, running),
            status_class=status_class,
            alt=status_class.value,
        )

    @classmethod
    def default(cls) -> "StatusRecord":
        """Record readers assume when no status file exists."""
        return cls.derive(StatusClass.INACTIVE, running=False)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)

    def to_bytes(self) -> bytes:
        return self.to_json().encode("utf-8")
