"""Visualization functions for computed family tree layouts."""

import logging
from pathlib import Path

import pydot

from family_tree_layout.models import TreeLayout

logger = logging.getLogger(__name__)

LIVING_COLOR = "#bfdbfe"
DECEASED_COLOR = "#e5e7eb"


def node_label(person) -> str:
    birth_year = str(person.birthday.year)
    death_year = str(person.death_date.year) if person.death_date else ""
    return f"{person.first_name}\n{person.last_name}\n{birth_year}-{death_year}"


def build_dot(layout: TreeLayout) -> pydot.Dot:
    """
    Build a Graphviz graph with every person pinned at its layout position.

    Layout y grows upwards for ancestors, which matches Graphviz coordinates,
    so positions are used as-is (in points). Render with `neato -n2` to keep
    them.
    """
    P = pydot.Dot(graph_type="digraph")
    P.set("splines", "true")
    P.set("outputorder", "edgesfirst")

    for node in layout.nodes:
        person = node.payload
        P.add_node(
            pydot.Node(
                str(node.id),
                label=node_label(person),
                pos=f"{node.x:g},{node.y:g}!",
                shape="box",
                style="rounded,filled",
                fillcolor=LIVING_COLOR if person.is_living else DECEASED_COLOR,
                fontsize="10",
            )
        )

    for edge in layout.edges:
        attrs = {
            "color": edge.style.stroke_color,
            "penwidth": str(edge.style.stroke_width),
        }
        if edge.style.dashed:
            attrs["style"] = "dashed"
        if edge.anchor == "left-right":
            # Couples: side to side, no arrow
            attrs["tailport"] = "e"
            attrs["headport"] = "w"
            attrs["dir"] = "none"
        P.add_edge(pydot.Edge(str(edge.source), str(edge.target), **attrs))

    return P


def draw_layout(layout: TreeLayout, ax=None):
    """Draw the layout directly with matplotlib. Returns the axes."""
    import matplotlib.pyplot as plt

    if ax is None:
        _, ax = plt.subplots(figsize=(20, 16))

    positions = {node.id: (node.x, node.y) for node in layout.nodes}

    for edge in layout.edges:
        (x1, y1), (x2, y2) = positions[edge.source], positions[edge.target]
        ax.plot(
            [x1, x2],
            [y1, y2],
            color=edge.style.stroke_color,
            linewidth=edge.style.stroke_width,
            linestyle="--" if edge.style.dashed else "-",
            zorder=1,
        )

    for node in layout.nodes:
        person = node.payload
        ax.text(
            node.x,
            node.y,
            node_label(person),
            ha="center",
            va="center",
            fontsize=8,
            bbox={
                "boxstyle": "round",
                "facecolor": LIVING_COLOR if person.is_living else DECEASED_COLOR,
                "edgecolor": "#6b7280",
            },
            zorder=2,
        )

    if positions:
        xs = [x for x, _ in positions.values()]
        ys = [y for _, y in positions.values()]
        ax.set_xlim(min(xs) - 150, max(xs) + 150)
        ax.set_ylim(min(ys) - 100, max(ys) + 100)
    ax.axis("off")
    return ax


def plot_layout(layout: TreeLayout, output_path: Path | None = None):
    """
    Render a layout.

    Args:
        layout: The computed TreeLayout
        output_path: `.dot` writes Graphviz source, `.png`/`.svg`/`.pdf` are
            rendered with `neato -n2` (requires Graphviz). If None, draws
            with matplotlib and displays interactively.
    """
    if output_path is None:
        import matplotlib.pyplot as plt

        draw_layout(layout)
        plt.tight_layout()
        plt.show()
        return

    output_path = Path(output_path)
    P = build_dot(layout)
    ext = output_path.suffix.lower().lstrip(".")

    if ext in ("dot", "gv"):
        P.write(str(output_path), format="raw")
    else:
        if ext not in ("png", "svg", "pdf"):
            ext = "png"
        P.write(str(output_path), prog=["neato", "-n2"], format=ext)

    logger.info("Graph saved to %s", output_path)
