import argparse
import csv
import logging
import multiprocessing as mp
import os
import sys
import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from lightsout.algebra import build_matrix, gf2_min_weight_solution, gf2_nullity
from lightsout.config import load_sweep_config
from lightsout.difficulty import grid_size_for
from lightsout.evaluation.metrics import band_miss, in_band, in_band_rate
from lightsout.generator import PuzzleGenerator

mp.freeze_support()

FIELDNAMES = [
    "pattern",
    "tier",
    "level_index",
    "n",
    "seed",
    "weight",
    "min_weight",
    "band_min",
    "band_max",
    "in_band",
    "band_miss",
    "attempts",
    "outcome",
    "nullity",
    "time_ms",
]

# Skip the coset enumeration when the nullspace is too large to walk.
MAX_NULLITY_FOR_MIN_WEIGHT = 12


def make_batches(cfg, batch_size):
    """Create job batches for parallel processing."""
    seeds = cfg.seeds()
    ranges = [
        (i, min(i + batch_size, len(seeds)))
        for i in range(0, len(seeds), batch_size)
    ]
    for pattern in cfg.patterns:
        for tier in cfg.tiers:
            for level_index in cfg.level_indices:
                for lo, hi in ranges:
                    yield {
                        "pattern": pattern.value,
                        "tier": tier.value,
                        "level_index": level_index,
                        "max_attempts": cfg.max_attempts,
                        "seeds": seeds[lo:hi],
                    }


def _run_batch(job):
    """Generate one batch of puzzles and describe each as a CSV row."""
    generator = PuzzleGenerator(max_attempts=job["max_attempts"])
    n = grid_size_for(job["tier"], job["level_index"])
    A = build_matrix(n, job["pattern"])
    nullity = gf2_nullity(A)

    rows = []
    for seed in job["seeds"]:
        start_time = time.perf_counter()
        puzzle = generator.generate(
            n, job["pattern"], job["tier"], job["level_index"], seed
        )
        time_ms = (time.perf_counter() - start_time) * 1000

        min_weight = ""
        if nullity <= MAX_NULLITY_FOR_MIN_WEIGHT:
            best, _ = gf2_min_weight_solution(A, puzzle.board.to_target())
            min_weight = int(best.sum())

        rows.append(
            {
                "pattern": job["pattern"],
                "tier": job["tier"],
                "level_index": job["level_index"],
                "n": n,
                "seed": seed,
                "weight": puzzle.weight,
                "min_weight": min_weight,
                "band_min": puzzle.band.min_weight,
                "band_max": puzzle.band.max_weight,
                "in_band": in_band(puzzle.weight, puzzle.band),
                "band_miss": band_miss(puzzle.weight, puzzle.band),
                "attempts": puzzle.attempts,
                "outcome": puzzle.outcome,
                "nullity": nullity,
                "time_ms": time_ms,
            }
        )
    return rows


def run_pool(jobs, writer, workers, total_jobs=None):
    """Run jobs in parallel and write results as they complete."""
    ctx = mp.get_context("spawn")
    done = 0
    all_rows = []
    start_time = time.time()

    with ProcessPoolExecutor(max_workers=workers, mp_context=ctx) as ex:
        futures = [ex.submit(_run_batch, j) for j in jobs]
        for fut in as_completed(futures):
            rows = fut.result()
            writer.writerows(rows)
            all_rows.extend(rows)
            done += 1

            elapsed = time.time() - start_time
            progress_line = (
                f"\r[progress] {done}/{total_jobs} batches | "
                f"{len(all_rows):>7,} boards | "
                f"elapsed: {int(elapsed // 60)}m {int(elapsed % 60)}s"
            )
            print(progress_line, end="", flush=True)
    print()
    return all_rows


def main():
    n_cpus = os.cpu_count() or 1
    default_workers = max(n_cpus - 1, 1)

    ap = argparse.ArgumentParser()
    ap.add_argument(
        "--config", default=str(ROOT / "configs" / "sweep_default.yaml")
    )
    ap.add_argument("--out", default=None, help="Output CSV path")
    ap.add_argument(
        "--workers", type=int, default=default_workers, help="Number of workers"
    )
    ap.add_argument(
        "--batch-size", type=int, default=50, help="Seeds per batch"
    )
    ap.add_argument("--log-level", default="WARNING")
    args = ap.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    cfg = load_sweep_config(args.config)
    out_dir = Path(cfg.output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    out_csv = args.out or str(out_dir / "sweep.csv")

    jobs = list(make_batches(cfg, args.batch_size))
    print(
        f"\nStarting {len(jobs):,} batches ({cfg.n_seeds:,} seeds per cell) "
        f"with {args.workers} workers...\n"
    )

    start_time = time.time()
    with open(out_csv, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=FIELDNAMES)
        writer.writeheader()
        rows = run_pool(jobs, writer, workers=args.workers, total_jobs=len(jobs))

    elapsed = time.time() - start_time
    print(f"\nDone in {int(elapsed/60)}m {int(elapsed%60)}s")
    print(f"In-band rate: {in_band_rate(rows):.1%}")
    print(f"Output: {out_csv}\n")


if __name__ == "__main__":
    main()
