"""Small helpers shared by every renderer of a LayoutResult."""

from typing import Sequence

from ..models import LayoutNode


def backbone_path(nodes: Sequence[LayoutNode]) -> str:
    """SVG path joining consecutive nodes with straight segments."""
    if len(nodes) < 2:
        return ""

    parts = [f"M {nodes[0].x:.2f} {nodes[0].y:.2f}"]
    parts.extend(f"L {node.x:.2f} {node.y:.2f}" for node in nodes[1:])
    return " ".join(parts)


def view_box(nodes: Sequence[LayoutNode], padding: float = 55.0, width: float = 420.0, height: float = 380.0) -> str:
    """Bounding box around all nodes as an SVG viewBox string."""
    if not nodes:
        return f"0 0 {width:g} {height:g}"

    min_x = min(node.x for node in nodes) - padding
    max_x = max(node.x for node in nodes) + padding
    min_y = min(node.y for node in nodes) - padding
    max_y = max(node.y for node in nodes) + padding

    return f"{min_x:g} {min_y:g} {max_x - min_x:g} {max_y - min_y:g}"
