"""
Timing harness for the ternary search tree.

`run_benchmark` builds one tree per (size, repeat), times a full insert pass,
a lookup pass over present keys, a lookup pass over absent keys and a full
remove pass, and returns the raw timings as a pandas DataFrame. `summarize`
reduces that frame to per-size means, deviations and per-operation cost.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np
import pandas as pd

from components.workload import WorkLoad
from tries.ternary_tree import TernaryTree

logger = logging.getLogger(__name__)

OPERATIONS = ("insert_s", "lookup_s", "miss_s", "remove_s")


@dataclass
class BenchConfig:
    """
    Configuration for run_benchmark
        sizes: list[int], number of keys per tree
        repeats: int, independent runs per size (each with its own seed)
        prefix_freq: float, shared-prefix clustering of the generated keys
        seed: int, base seed; repeat r of a size uses seed + r
    """
    sizes: List[int] = field(default_factory=lambda: [1_000, 5_000, 10_000])
    repeats: int = 3
    prefix_freq: float = 0.0
    seed: Optional[int] = 0

    def __post_init__(self):
        if not self.sizes:
            raise ValueError("sizes must not be empty")
        if any(n <= 0 for n in self.sizes):
            raise ValueError("sizes must be positive")
        if self.repeats < 1:
            raise ValueError("repeats must be >= 1")
        if self.prefix_freq < 0 or self.prefix_freq > 1:
            raise ValueError("prefix_freq must be between 0 and 1")


def time_operations(keys, misses=()) -> Dict[str, float]:
    """Time insert / lookup / miss / remove passes over `keys` on a fresh tree.

    Duplicate keys in `keys` are kept: their second insert is a timed
    rejection, as in a real load. `misses` are probed with `contains` and are
    expected to be absent.
    """
    tree = TernaryTree()
    pairs = [(k, i) for i, k in enumerate(keys)]

    t0 = time.perf_counter()
    for k, v in pairs:
        tree.insert(k, v)
    t1 = time.perf_counter()
    for k in keys:
        tree.contains(k)
    t2 = time.perf_counter()
    for k in misses:
        tree.contains(k)
    t3 = time.perf_counter()

    size = tree.size()
    nodes = tree.count_nodes()
    height = tree.height()

    t4 = time.perf_counter()
    for k in keys:
        tree.remove(k)
    t5 = time.perf_counter()

    return {
        "insert_s": t1 - t0,
        "lookup_s": t2 - t1,
        "miss_s": t3 - t2,
        "remove_s": t5 - t4,
        "size": size,
        "nodes": nodes,
        "height": height,
        "left_after_remove": tree.size(),
    }


def run_benchmark(config: BenchConfig) -> pd.DataFrame:
    rows = []
    for n in config.sizes:
        for r in range(config.repeats):
            seed = None if config.seed is None else config.seed + r
            wl = WorkLoad(seed=seed)
            keys = wl.keys(n, p_freq=config.prefix_freq)
            # lowercase keys never collide with the upper-case workload alphabet
            misses = [k.lower() for k in keys]
            stats = time_operations(keys, misses)
            stats.update({"n": n, "repeat": r})
            rows.append(stats)
            logger.info("n=%d repeat=%d insert=%.4fs remove=%.4fs nodes=%d",
                        n, r, stats["insert_s"], stats["remove_s"], stats["nodes"])
    cols = ["n", "repeat", *OPERATIONS, "size", "nodes", "height", "left_after_remove"]
    return pd.DataFrame(rows, columns=cols)


def summarize(df: pd.DataFrame) -> pd.DataFrame:
    """Per-size mean and std of every timed operation plus microseconds per key."""
    if df.empty:
        raise ValueError("no benchmark rows to summarize")
    grouped = df.groupby("n")
    out = grouped[list(OPERATIONS)].agg(["mean", "std"])
    out.columns = [f"{op}_{stat}" for op, stat in out.columns]
    out = out.fillna(0.0)
    n = out.index.to_numpy(dtype=np.float64)
    for op in OPERATIONS:
        out[f"{op[:-2]}_us_per_key"] = np.round(out[f"{op}_mean"].to_numpy() / n * 1e6, 4)
    out["nodes_mean"] = grouped["nodes"].mean()
    out["nodes_per_key"] = np.round(out["nodes_mean"].to_numpy() / n, 4)
    return out.reset_index()
