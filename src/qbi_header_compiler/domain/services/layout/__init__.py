"""Layout calculation services."""

from .layout_calculator import (
    FieldPlacement,
    Layout,
    align_up,
    calculate_field_offsets,
    calculate_layout,
    calculate_padding,
)

__all__ = [
    "FieldPlacement",
    "Layout",
    "align_up",
    "calculate_field_offsets",
    "calculate_layout",
    "calculate_padding",
]
