"""Generation-row layout for family relationship graphs."""

from family_tree_layout.layout import LayoutConfig, calculate_layout

__all__ = ["LayoutConfig", "calculate_layout"]
