"""
Vortex renderer: draws a computed vortex with matplotlib.

The numeric work happens in modular_vortex; this module only turns a
VortexLayout into artists. If the core raises, nothing is drawn.

Usage:
    from tools.render import render_vortex, save

    fig, ax = render_vortex(Vortex(811, 3), color='#5c37e1')
    save(fig, "vortex_811_3")
"""

import logging
import sys
from pathlib import Path

_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(_ROOT))
from modular_vortex import (
    Vortex, VortexResult, make_layout,
    DEFAULT_COLOR, MAX_POINTS, MAX_LABELS, CANVAS_MARGIN,
)

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
from matplotlib.collections import LineCollection
from matplotlib.patches import Circle

logger = logging.getLogger(__name__)

BACKGROUND = '#ffffff'
LABEL_FONT = 'monospace'


def _as_result(target):
    if isinstance(target, Vortex):
        return target.compute()
    if isinstance(target, VortexResult):
        return target
    raise TypeError(f"expected Vortex or VortexResult, got {type(target).__name__}")


def render_vortex(target, ax=None, color=DEFAULT_COLOR, show_points=False,
                  show_labels=False, size=800, margin=CANVAS_MARGIN,
                  max_points=MAX_POINTS, max_labels=MAX_LABELS):
    """
    Draw circle, optional points/labels, and one period of the cycle.

    Points are only drawn for modulus <= max_points and labels for
    modulus <= max_labels. Returns (fig, ax).
    """
    # Compute before creating any figure so a core failure draws nothing
    result = _as_result(target)
    layout = make_layout(result, size=size, margin=margin)

    if ax is None:
        fig, ax = plt.subplots(figsize=(size / 100, size / 100), facecolor=BACKGROUND)
    else:
        fig = ax.figure
    ax.set_facecolor(BACKGROUND)

    ax.add_patch(Circle(layout.center, layout.radius, fill=False,
                        edgecolor='black', linewidth=1))

    set_points = show_points and result.modulus <= max_points
    set_labels = show_labels and result.modulus <= max_labels
    if show_points and not set_points:
        logger.warning("modulus %d > %d, points not drawn", result.modulus, max_points)
    if show_labels and not set_labels:
        logger.warning("modulus %d > %d, labels not drawn", result.modulus, max_labels)

    # The last point coincides with point 0
    if set_points:
        pts = layout.points[:-1]
        ax.scatter(pts[:, 0], pts[:, 1], s=(2 * layout.point_radius) ** 2,
                   color=color, zorder=3)
    if set_labels:
        for label in layout.labels[:-1]:
            ax.text(label.x, label.y, label.text, fontsize=8, family=LABEL_FONT,
                    ha='center', va='center')

    ax.add_collection(LineCollection(layout.segments, colors=color, linewidths=1))

    ax.set_xlim(0, size)
    ax.set_ylim(size, 0)  # screen coordinates: y grows downward
    ax.set_aspect('equal')
    ax.axis('off')
    ax.set_title(f"{result.multiplier}^k mod {result.modulus}", color=color)

    logger.info("rendered modulus=%d multiplier=%d with %d segments",
                result.modulus, result.multiplier, len(layout.segments))
    return fig, ax


def save(fig, name, out_dir=None):
    """Save figure to figures/ directory (or out_dir). Returns the path."""
    out_dir = Path(out_dir) if out_dir is not None else _ROOT / "figures"
    out_dir.mkdir(parents=True, exist_ok=True)
    out = out_dir / f"{name}.png"
    fig.savefig(out, dpi=150, facecolor=fig.get_facecolor())
    plt.close(fig)
    logger.info("Figure saved: %s", out)
    return out
