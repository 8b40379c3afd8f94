import matplotlib.pyplot as plt
import numpy as np
from matplotlib.patches import Rectangle

from ..algebra import build_matrix


def _combined_toggles(n, pattern, presses):
    """XOR of the toggle columns for one or more presses, as an n x n grid."""
    A = build_matrix(n, pattern)
    combo = np.zeros(n * n, dtype=np.uint8)
    for p in presses:
        combo ^= A[:, p]
    return combo.reshape(n, n)


def plot_weight_histogram(weights, band, ax=None, title=None, color="tab:blue"):
    """
    Histogram of solution weights with the target difficulty band shaded.

    Parameters
    ----------
    weights : iterable[int]
        Solution weights from a generation sweep.
    band : DifficultyBand
        Inclusive band the generator was aiming for.
    """
    weights = np.asarray(list(weights), dtype=int)
    if ax is None:
        _, ax = plt.subplots(figsize=(4.5, 3.0))

    hi = int(max(weights.max() if weights.size else 0, band.max_weight))
    bins = np.arange(0, hi + 2) - 0.5
    ax.hist(weights, bins=bins, color=color, edgecolor="black", linewidth=0.5)
    ax.axvspan(
        band.min_weight - 0.5,
        band.max_weight + 0.5,
        color="tab:green",
        alpha=0.15,
        label=f"band [{band.min_weight}, {band.max_weight}]",
    )
    ax.set_xlabel("solution weight")
    ax.set_ylabel("boards")
    if title:
        ax.set_title(title)
    ax.legend(loc="upper right", fontsize="small")
    return ax


def show_influence_heatmap(
    n: int, pattern, presses, ax=None, pressed_color="red", cmap="viridis"
):
    """
    Show which cells end up toggled after one or more presses.
    Presses are flat indices r * n + c and combine via XOR.
    """
    presses = np.atleast_1d(presses)
    if ax is None:
        _, ax = plt.subplots(figsize=(3.5, 3.5))
    data = _combined_toggles(n, pattern, presses)
    ax.imshow(data, cmap=cmap, vmin=0, vmax=1)
    for p in presses:
        r, c = divmod(int(p), n)
        ax.add_patch(
            Rectangle(
                (c - 0.5, r - 0.5),
                1,
                1,
                edgecolor=pressed_color,
                facecolor="none",
                linewidth=2,
            )
        )
    ax.set_xticks(range(n))
    ax.set_yticks(range(n))
    ax.set_xlabel("col")
    ax.set_ylabel("row")
    ax.set_title(str(getattr(pattern, "value", pattern)))
    return ax
