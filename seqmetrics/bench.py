"""Throughput measurements for the LCS and Levenshtein metrics.

Run as a command to time pairwise comparisons of random strings, the cached
scorers and long sequences that are either nearly equal or entirely different.
"""

from __future__ import annotations

import argparse
import random
import string
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from seqmetrics.lcsseq import CachedLCSseq, lcs_seq_distance, lcs_seq_normalized_distance
from seqmetrics.levenshtein import (
    CachedLevenshtein,
    levenshtein_distance,
    levenshtein_normalized_distance,
)

ALPHABET = string.digits + string.ascii_uppercase + string.ascii_lowercase

_LCS_SIMILAR_CASES = ((100, 30), (500, 100), (500, 30), (5000, 30), (10000, 30), (20000, 30), (50000, 30))
_LONG_CASES = ((100, 30), (500, 30), (5000, 30), (10000, 30), (20000, 30), (50000, 30))
_DEFAULT_LENGTHS = (8, 16, 32, 64)


@dataclass(frozen=True)
class BenchResult:
    """Outcome of one benchmark run."""

    name: str
    iterations: int
    items: int
    elapsed: float
    checksum: float = 0

    @property
    def rate(self) -> float:
        """Items processed per second."""
        return self.items / self.elapsed if self.elapsed > 0 else float("inf")

    @property
    def inv_rate(self) -> float:
        """Seconds spent per item."""
        return self.elapsed / self.items if self.items else float("inf")

    def __str__(self) -> str:
        return (
            f"{self.name:<40} {self.iterations:>8} {self.elapsed * 1e3:>12.3f} ms "
            f"Rate={self.rate:.4g}/s InvRate={self.inv_rate:.4g}s"
        )


def generate(max_length: int, rng: random.Random | None = None) -> str:
    """Random string of ``max_length`` digits and ASCII letters."""
    if max_length < 0:
        raise ValueError("length must not be negative")
    rng = rng if rng is not None else random.Random()
    return "".join(rng.choice(ALPHABET) for _ in range(max_length))


def long_similar_pair(length: int) -> tuple[str, str]:
    """``"a" + "b" * (length - 2) + "a"`` paired with ``"b" * length``."""
    if length < 2:
        raise ValueError("length must be at least 2")
    return "a" + "b" * (length - 2) + "a", "b" * length


def long_non_similar_pair(length: int) -> tuple[str, str]:
    """``"a" * length`` paired with ``"b" * length``."""
    if length < 0:
        raise ValueError("length must not be negative")
    return "a" * length, "b" * length


def _random_strings(length: int, count1: int, count2: int, rng: random.Random | None):
    if count1 < 0 or count2 < 0:
        raise ValueError("counts must not be negative")
    rng = rng if rng is not None else random.Random()
    seq1 = [generate(length, rng) for _ in range(count1)]
    seq2 = [generate(length, rng) for _ in range(count2)]
    return seq1, seq2


def bench_pairwise(
    metric: Callable[[str, str], Any],
    length: int,
    count1: int = 256,
    count2: int = 10000,
    rng: random.Random | None = None,
) -> BenchResult:
    """Call ``metric`` on every pair of two sets of random strings."""
    seq1, seq2 = _random_strings(length, count1, count2, rng)
    checksum = 0
    start = time.perf_counter()
    for s2 in seq2:
        for s1 in seq1:
            checksum += metric(s1, s2)
    elapsed = time.perf_counter() - start
    name = f"{getattr(metric, '__name__', 'metric')}/{length}"
    return BenchResult(name, 1, len(seq1) * len(seq2), elapsed, checksum)


def bench_cached(
    scorer_factory: Callable[[str], Any],
    length: int,
    count1: int = 256,
    count2: int = 10000,
    rng: random.Random | None = None,
) -> BenchResult:
    """Build a scorer per string of the first set and compute its similarity to the second set."""
    seq1, seq2 = _random_strings(length, count1, count2, rng)
    checksum = 0
    start = time.perf_counter()
    for s1 in seq1:
        scorer = scorer_factory(s1)
        for s2 in seq2:
            checksum += scorer.similarity(s2)
    elapsed = time.perf_counter() - start
    name = f"{getattr(scorer_factory, '__name__', 'scorer')}/{length}"
    return BenchResult(name, 1, len(seq1) * len(seq2), elapsed, checksum)


def bench_long_sequence(
    metric: Callable[..., Any],
    s1: Sequence,
    s2: Sequence,
    score_cutoff: Any = None,
    iterations: int = 1,
) -> BenchResult:
    """Repeat ``metric(s1, s2, score_cutoff=...)``; items count the longer length per call."""
    if iterations < 1:
        raise ValueError("iterations must be at least 1")
    kwargs = {} if score_cutoff is None else {"score_cutoff": score_cutoff}
    checksum = 0
    start = time.perf_counter()
    for _ in range(iterations):
        checksum += metric(s1, s2, **kwargs)
    elapsed = time.perf_counter() - start
    length = max(len(s1), len(s2))
    name = f"{getattr(metric, '__name__', 'metric')}/{length}"
    if score_cutoff is not None:
        name += f"/{score_cutoff}"
    return BenchResult(name, iterations, iterations * length, elapsed, checksum)


def _named(result: BenchResult, name: str) -> BenchResult:
    return BenchResult(name, result.iterations, result.items, result.elapsed, result.checksum)


def _long_cases(args: argparse.Namespace, defaults: tuple[tuple[int, int], ...]):
    if args.long_lengths is None:
        return defaults
    return tuple((length, args.score_cutoff) for length in args.long_lengths)


def _run_lcs(args: argparse.Namespace, rng: random.Random) -> list[BenchResult]:
    results = []
    for length, cutoff in _long_cases(args, _LCS_SIMILAR_CASES):
        s1, s2 = long_similar_pair(length)
        res = bench_long_sequence(lcs_seq_distance, s1, s2, cutoff, args.iterations)
        results.append(_named(res, f"LcsLongSimilarSequence/{length}/{cutoff}"))
    for length, cutoff in _long_cases(args, _LONG_CASES):
        s1, s2 = long_non_similar_pair(length)
        res = bench_long_sequence(lcs_seq_distance, s1, s2, cutoff, args.iterations)
        results.append(_named(res, f"LcsLongNonSimilarSequence/{length}/{cutoff}"))
    for length in args.lengths:
        res = bench_pairwise(lcs_seq_distance, length, args.count1, args.count2, rng)
        results.append(_named(res, f"LCS/{length}"))
    for length in args.lengths:
        res = bench_cached(CachedLCSseq, length, args.count1, args.count2, rng)
        results.append(_named(res, f"LCS_Cached/{length}"))
    # normalized distance of short fixed strings, for comparison with Levenshtein
    res = bench_long_sequence(lcs_seq_normalized_distance, "aaaaa aaaaa", "bbbbb bbbbb", None, args.iterations)
    results.append(_named(res, "LcsNormDist/Different Strings"))
    return results


def _run_levenshtein(args: argparse.Namespace, rng: random.Random) -> list[BenchResult]:
    results = []
    for length, cutoff in _long_cases(args, _LONG_CASES):
        s1, s2 = long_similar_pair(length)
        res = bench_long_sequence(levenshtein_distance, s1, s2, cutoff, args.iterations)
        results.append(_named(res, f"LevLongSimilarSequence/{length}/{cutoff}"))
    for length, cutoff in _long_cases(args, _LONG_CASES):
        s1, s2 = long_non_similar_pair(length)
        res = bench_long_sequence(levenshtein_distance, s1, s2, cutoff, args.iterations)
        results.append(_named(res, f"LevLongNonSimilarSequence/{length}/{cutoff}"))

    same, other = "aaaaa aaaaa", "bbbbb bbbbb"
    fixed = (
        ("LevWeightedDist1/Similar Strings", levenshtein_distance, same, same),
        ("LevWeightedDist2/Different Strings", levenshtein_distance, same, other),
        ("LevNormWeightedDist1/Similar Strings", levenshtein_normalized_distance, same, same),
        ("LevNormWeightedDist2/Different Strings", levenshtein_normalized_distance, same, other),
    )
    for name, metric, s1, s2 in fixed:
        results.append(_named(bench_long_sequence(metric, s1, s2, None, args.iterations), name))

    for length in args.lengths:
        res = bench_pairwise(levenshtein_distance, length, args.count1, args.count2, rng)
        results.append(_named(res, f"Levenshtein/{length}"))
    for length in args.lengths:
        res = bench_cached(CachedLevenshtein, length, args.count1, args.count2, rng)
        results.append(_named(res, f"Levenshtein_Cached/{length}"))
    return results


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Time the LCS and Levenshtein metrics.")
    parser.add_argument("--metric", choices=("lcs", "levenshtein", "all"), default="all")
    parser.add_argument("--lengths", type=int, nargs="+", default=list(_DEFAULT_LENGTHS),
                        help="lengths of the random strings")
    parser.add_argument("--count1", type=int, default=256, help="size of the first string set")
    parser.add_argument("--count2", type=int, default=100, help="size of the second string set")
    parser.add_argument("--long-lengths", type=int, nargs="+", default=None,
                        help="lengths of the long sequences (default: the built-in cases)")
    parser.add_argument("--score-cutoff", type=int, default=30,
                        help="score cutoff used with --long-lengths")
    parser.add_argument("--iterations", type=int, default=1, help="repetitions of single comparisons")
    parser.add_argument("--seed", type=int, default=None, help="seed for the random strings")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the selected benchmarks and print one line per result."""
    parser = _parser()
    args = parser.parse_args(argv)
    if args.iterations < 1:
        parser.error("--iterations must be at least 1")
    if args.count1 < 0 or args.count2 < 0:
        parser.error("counts must not be negative")
    if any(length < 0 for length in args.lengths):
        parser.error("lengths must not be negative")
    if args.long_lengths is not None and any(length < 2 for length in args.long_lengths):
        parser.error("long lengths must be at least 2")

    rng = random.Random(args.seed)
    results: list[BenchResult] = []
    if args.metric in ("lcs", "all"):
        results.extend(_run_lcs(args, rng))
    if args.metric in ("levenshtein", "all"):
        results.extend(_run_levenshtein(args, rng))

    for result in results:
        print(result)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())