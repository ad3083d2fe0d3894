"""
NetPerfCompare - Color Assignment

Stable color assignment for selected entity ids.
"""

from typing import Any, Dict, Iterable, List, Optional


PALETTE: List[str] = [
    "#1f77b4",
    "#ff7f0e",
    "#2ca02c",
    "#d62728",
    "#9467bd",
    "#8c564b",
    "#e377c2",
    "#7f7f7f",
    "#bcbd22",
    "#17becf",
]


def colors_for(ids: Iterable[Any], palette: Optional[List[str]] = None) -> Dict[Any, str]:
    """
    Assign palette colors to ids in order of first appearance.

    Repeated ids keep the color of their first appearance; the palette
    wraps around when there are more ids than colors.

    Args:
        ids: Entity ids in selection order
        palette: Colors to cycle through (default PALETTE)

    Returns:
        Mapping of id -> hex color
    """
    palette = palette or PALETTE
    colors: Dict[Any, str] = {}
    for entity_id in ids:
        if entity_id not in colors:
            colors[entity_id] = palette[len(colors) % len(palette)]
    return colors
