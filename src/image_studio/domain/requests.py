"""Transformation requests accepted by an editing session."""

from dataclasses import dataclass
from enum import StrEnum


class TransformationKind(StrEnum):
    """Supported image operations."""

    BACKGROUND_REPLACE = "background_replace"
    FREEFORM_EDIT = "freeform_edit"
    ENHANCE = "enhance"
    PASSPORT_NORMALIZE = "passport_normalize"
    ANALYZE = "analyze"


class AspectRatio(StrEnum):
    """Output aspect ratios understood by the image model."""

    SQUARE = "1:1"
    PORTRAIT = "3:4"
    LANDSCAPE = "4:3"
    TALL = "9:16"
    WIDE = "16:9"


class BackgroundColor(StrEnum):
    """Background presets offered by the editor."""

    WHITE = "White"
    BLUE = "Blue"
    RED = "Red"
    BLACK = "Black"
    TRANSPARENT = "Transparent"


@dataclass(frozen=True)
class BackgroundReplace:
    """Replace the background with a solid color."""

    color: str

    kind = TransformationKind.BACKGROUND_REPLACE


@dataclass(frozen=True)
class FreeformEdit:
    """Apply a free-form text instruction."""

    prompt: str
    aspect_ratio: AspectRatio = AspectRatio.SQUARE

    kind = TransformationKind.FREEFORM_EDIT


@dataclass(frozen=True)
class Enhance:
    """Improve clarity, sharpness and lighting."""

    kind = TransformationKind.ENHANCE


@dataclass(frozen=True)
class PassportNormalize:
    """Turn the photo into a passport-standard portrait."""

    kind = TransformationKind.PASSPORT_NORMALIZE


@dataclass(frozen=True)
class Analyze:
    """Describe the image without changing it."""

    kind = TransformationKind.ANALYZE


TransformationRequest = (
    BackgroundReplace | FreeformEdit | Enhance | PassportNormalize | Analyze
)
