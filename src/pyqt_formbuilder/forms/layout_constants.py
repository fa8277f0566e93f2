"""
Layout constants for schema-rendered forms.

Centralizes spacing, margins and error styling so every rendered form looks
the same regardless of its schema.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class FormLayoutConfig:
    """Spacing and styling for SchemaFormWidget."""

    # Outer layout (title, field container, buttons)
    main_layout_spacing: int = 8
    main_layout_margins: tuple = (8, 8, 8, 8)

    # Between field rows
    content_layout_spacing: int = 6

    # Inside a field row (label, input, hint, error)
    field_row_spacing: int = 2

    # Fixed label column width for the horizontal layout
    horizontal_label_width: int = 160

    error_style: str = "color: #c0392b;"
    hint_style: str = "color: #7f8c8d;"
    title_style: str = "font-size: 16pt; font-weight: bold;"


# Default configuration
DEFAULT_LAYOUT = FormLayoutConfig()

COMPACT_LAYOUT = FormLayoutConfig(
    main_layout_spacing=4,
    main_layout_margins=(4, 4, 4, 4),
    content_layout_spacing=2,
    field_row_spacing=1,
    horizontal_label_width=120,
)
