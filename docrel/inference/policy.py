"""Inference policy options."""

from dataclasses import dataclass
from typing import Optional

from docrel.config.settings import Settings, get_settings

DEFAULT_STRING_WIDTH = 128


@dataclass(frozen=True)
class InferencePolicy:
    """
    Options recognized by schema inference.

    Attributes:
        always_with_primary_key: Give every table an ``_id`` key at creation,
            not only tables that end up with child tables
        default_string_width: Minimum width of inferred string columns and
            width of placeholder columns
    """
    always_with_primary_key: bool = False
    default_string_width: int = DEFAULT_STRING_WIDTH

    def __post_init__(self):
        if self.default_string_width < 1:
            raise ValueError(
                f"default_string_width must be positive, got {self.default_string_width}")

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "InferencePolicy":
        settings = settings or get_settings()
        return cls(
            always_with_primary_key=settings.always_with_primary_key,
            default_string_width=settings.default_string_width,
        )
