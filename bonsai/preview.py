"""
Matplotlib previews of bonsai snapshots.

A quick way to look at generated trees while tuning a config. Branches are
drawn as round-capped segments whose line width is the branch thickness,
leaves as small dots. The canvas y axis is flipped to match screen
coordinates.
"""

from __future__ import annotations

import math

import matplotlib.pyplot as plt

from bonsai.tree import Bonsai
from bonsai.visibility import VisibleElements

LEAF_COLOR = "#3c8c46"
BACKGROUND = "#f5ecd7"


def draw_elements(
    ax: plt.Axes,
    elements: VisibleElements,
    canvas_size: tuple[float, float],
    thickness_scale: float = 0.5,
    leaf_size: float = 12.0,
) -> None:
    """Draw a snapshot onto existing axes."""
    width, height = canvas_size
    ax.set_xlim(0, width)
    ax.set_ylim(height, 0)  # Flip Y for screen coords
    ax.set_aspect("equal")
    ax.set_facecolor(BACKGROUND)
    ax.set_xticks([])
    ax.set_yticks([])

    for branch in elements.branches:
        ax.plot(
            [branch.start.x, branch.end.x],
            [branch.start.y, branch.end.y],
            color=branch.color,
            linewidth=max(0.3, branch.thickness * thickness_scale),
            solid_capstyle="round",
            zorder=2,
        )

    if elements.leaves:
        ax.scatter(
            [p.x for p in elements.leaves],
            [p.y for p in elements.leaves],
            s=leaf_size,
            color=LEAF_COLOR,
            alpha=0.8,
            linewidths=0,
            zorder=3,
        )


def render_elements(
    elements: VisibleElements,
    canvas_size: tuple[float, float],
    figsize: tuple = (6, 6),
) -> tuple[plt.Figure, plt.Axes]:
    """
    Render a single snapshot.

    Args:
        elements: Output of `Bonsai.get_visible_elements`
        canvas_size: (width, height) the bonsai was generated for
        figsize: Figure size in inches

    Returns:
        (figure, axes) tuple
    """
    fig, ax = plt.subplots(figsize=figsize)
    draw_elements(ax, elements, canvas_size)
    return fig, ax


def save_elements(filepath: str, bonsai: Bonsai, dpi: int = 150, figsize: tuple = (6, 6)):
    """Render the bonsai's current snapshot and save it to file."""
    elements = bonsai.get_visible_elements()
    fig, ax = render_elements(elements, (bonsai.width, bonsai.height), figsize)
    ax.set_title(f"stage {bonsai.stage}/{bonsai.max_growth}")
    fig.savefig(filepath, dpi=dpi, bbox_inches="tight", pad_inches=0.1)
    plt.close(fig)
    print(f"Saved to {filepath}")


def render_growth_sequence(
    bonsai: Bonsai,
    columns: int = 4,
    panel_size: float = 3.0,
) -> tuple[plt.Figure, list[plt.Axes]]:
    """
    Grow `bonsai` to full size, drawing one panel per stage.

    Starts from the bonsai's current stage; the bonsai is left fully grown.
    """
    snapshots = [(bonsai.stage, bonsai.get_visible_elements())]
    while bonsai.grow():
        snapshots.append((bonsai.stage, bonsai.get_visible_elements()))

    rows = math.ceil(len(snapshots) / columns)
    fig, grid = plt.subplots(
        rows, columns, figsize=(panel_size * columns, panel_size * rows), squeeze=False
    )
    axes = list(grid.flat)

    for ax, (stage, elements) in zip(axes, snapshots):
        draw_elements(ax, elements, (bonsai.width, bonsai.height), thickness_scale=0.25, leaf_size=4.0)
        ax.set_title(f"stage {stage}", fontsize=9)

    for ax in axes[len(snapshots):]:
        ax.axis("off")

    fig.tight_layout()
    return fig, axes[:len(snapshots)]


def save_growth_sequence(filepath: str, bonsai: Bonsai, dpi: int = 120, columns: int = 4):
    """Render a growth sequence and save it to file."""
    fig, _ = render_growth_sequence(bonsai, columns=columns)
    fig.savefig(filepath, dpi=dpi, bbox_inches="tight")
    plt.close(fig)
    print(f"Saved to {filepath}")
