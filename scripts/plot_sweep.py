import argparse
import csv
import sys
from collections import defaultdict
from pathlib import Path

import matplotlib.pyplot as plt

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from lightsout.difficulty import DifficultyBand
from lightsout.evaluation.metrics import in_band_rate, summarize_weights
from lightsout.evaluation.plots import plot_weight_histogram, show_influence_heatmap


def main(argv=None):
    ap = argparse.ArgumentParser()
    ap.add_argument("csv", help="Sweep CSV written by run_sweep.py")
    ap.add_argument("--out", default=None, help="Save figure here instead of showing it")
    ap.add_argument(
        "--influence",
        default=None,
        metavar="PATTERN",
        help="Also show the toggle set of the centre cell for this pattern",
    )
    args = ap.parse_args(argv)

    with open(args.csv, "r", newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    if not rows:
        sys.exit(f"No sweep rows in {args.csv}")

    groups = defaultdict(list)
    for row in rows:
        groups[(row["pattern"], row["tier"], row["n"])].append(row)

    keys = sorted(groups)
    extra = 1 if args.influence else 0
    fig, axes = plt.subplots(
        len(keys) + extra, 1, figsize=(5.0, 2.8 * (len(keys) + extra)), squeeze=False
    )
    if args.influence:
        n = max(int(k[2]) for k in keys)
        centre = (n // 2) * n + n // 2
        show_influence_heatmap(n, args.influence, [centre], ax=axes[-1, 0])
    for ax, key in zip(axes[:, 0], keys):
        group = groups[key]
        band = DifficultyBand(int(group[0]["band_min"]), int(group[0]["band_max"]))
        weights = [int(r["weight"]) for r in group]
        stats = summarize_weights(weights)
        pattern, tier, n = key
        plot_weight_histogram(
            weights,
            band,
            ax=ax,
            title=(
                f"{pattern} / {tier} / {n}x{n}: "
                f"mean {stats['mean']:.1f}, in-band {in_band_rate(group):.0%}"
            ),
        )
    fig.tight_layout()

    if args.out:
        fig.savefig(args.out, dpi=120)
        print(f"Saved {args.out}")
    else:
        plt.show()


if __name__ == "__main__":
    main()
