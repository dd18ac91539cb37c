"""Pydantic schemas for sizing requests and display options."""

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, field_validator

from .filters import ResampleFilterKind

# ─────────────────────────────────────────────────────────────
# Sizing request
# ─────────────────────────────────────────────────────────────


class SizingRequest(BaseModel):
    """Caller-supplied dimensions, all in display-cell units.

    ``height`` and ``max_height`` count terminal rows; each row renders two
    vertical pixels. ``width`` and ``max_width`` count columns.

    Attributes:
        width: Explicit output width in columns
        height: Explicit output height in rows
        max_width: Upper bound on width when fitting to the surface
        max_height: Upper bound on height when fitting to the surface
    """

    width: PositiveInt | None = None
    height: PositiveInt | None = None
    max_width: PositiveInt | None = None
    max_height: PositiveInt | None = None

    model_config = ConfigDict(frozen=True, extra="forbid")

    @property
    def has_explicit_dimensions(self) -> bool:
        return self.width is not None or self.height is not None


# ─────────────────────────────────────────────────────────────
# Display options
# ─────────────────────────────────────────────────────────────


class DisplayOptions(BaseModel):
    """Everything needed to show one image, as parsed from the command line."""

    file: str = Field(..., description="Path to a raster or vector image")
    sizing: SizingRequest = Field(default_factory=SizingRequest)
    true_color: bool = False
    filter: ResampleFilterKind = Field(default_factory=ResampleFilterKind.default)
    verbose: bool = False

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("filter", mode="before")
    @classmethod
    def validate_filter(cls, value: object) -> ResampleFilterKind:
        """Resolve filter names, rejecting anything outside the known kernels."""
        if isinstance(value, ResampleFilterKind):
            return value
        return ResampleFilterKind.from_name(str(value))
