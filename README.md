# seqmetrics

Edit distances and similarity scores for strings and other sequences, in pure
Python with no runtime dependencies.

## Metrics

| Module | Functions | Cached scorer |
| --- | --- | --- |
| `seqmetrics.levenshtein` | `levenshtein_distance`, `levenshtein_similarity`, `levenshtein_normalized_distance`, `levenshtein_normalized_similarity`, `levenshtein_editops`, `levenshtein_align`, `find_hirschberg_pos` | `CachedLevenshtein` |
| `seqmetrics.lcsseq` | `lcs_seq_distance`, `lcs_seq_similarity`, `lcs_seq_normalized_distance`, `lcs_seq_normalized_similarity`, `lcs_seq_editops` | `CachedLCSseq` |
| `seqmetrics.hamming` | `hamming_distance`, `hamming_similarity`, `hamming_normalized_distance`, `hamming_normalized_similarity`, `hamming_editops` | `CachedHamming` |

- **Levenshtein** uses unit costs by default; pass a
  `LevenshteinWeightTable(insert_cost, delete_cost, replace_cost)` for weighted
  costs. Edit operations of large inputs are found with Hirschberg's
  algorithm to bound memory use.
- **LCSseq** is the length of the longest common subsequence; its distance is
  the longer length minus that.
- **Hamming** counts differing positions. With `pad=True` (the default) the
  extra elements of the longer sequence count as differences; with
  `pad=False` sequences of different lengths raise `ValueError`.

The building blocks of the Levenshtein distance (bit-parallel algorithms,
the banded variant, the mbleven search, the weighted dynamic program) are
available in `seqmetrics.levenshtein_core`. Affix trimming and small bit
helpers live in `seqmetrics.common`.

## Installation

```
pip install seqmetrics
```

## Usage

```python
from seqmetrics.editops import LevenshteinWeightTable
from seqmetrics.hamming import hamming_distance
from seqmetrics.lcsseq import CachedLCSseq, lcs_seq_similarity
from seqmetrics.levenshtein import levenshtein_distance, levenshtein_editops

levenshtein_distance("kitten", "sitting")                  # 3
levenshtein_distance("kitten", "sitting", score_cutoff=2)  # 3 (cutoff + 1)
levenshtein_distance("ab", "ba", weights=LevenshteinWeightTable(1, 1, 2))

ops = levenshtein_editops("kitten", "sitting")
for op in ops:
    print(op.type, op.src_pos, op.dest_pos)
opcodes = ops.as_opcodes()

lcs_seq_similarity("South Korea", "North Korea")           # 9

scorer = CachedLCSseq("aaaa")
scorer.normalized_similarity("aaab")

hamming_distance("abc", "abd")                              # 1
```

Strings, bytes, lists and tuples all work. LCS and Levenshtein need hashable
elements; Hamming only compares elements for equality.

### Score cutoffs

- Distances above `score_cutoff` are reported as `score_cutoff + 1`.
- Similarities below `score_cutoff` are reported as `0`.
- Normalized distances above `score_cutoff` are reported as `1.0`, normalized
  similarities below it as `0.0`.

The Levenshtein functions also take a `score_hint`, an expected distance that
lets the search start with a narrow band.

### Edit operations

`seqmetrics.editops` holds `EditType`, `EditOp`, `Opcode`, `Editops` and
`Opcodes`. `Editops` and `Opcodes` keep `src_len` and `dest_len`, support
`len()`, iteration, indexing and slicing, and offer `slice`, `reverse` and
`inverse`; `Editops` also has `remove_slice` and `remove_subsequence`.
Convert between them with `Editops.as_opcodes` / `Opcodes.as_editops` or the
class methods `Opcodes.from_editops` / `Editops.from_opcodes`.

## Benchmarks

`seqmetrics-bench` times pairwise and cached scoring over random strings, and
single comparisons of long nearly-equal and entirely different sequences:

```
seqmetrics-bench --help
seqmetrics-bench --metric lcs --lengths 8 16 --count2 50 --seed 1
```

Options: `--metric {lcs,levenshtein,all}`, `--lengths`, `--count1`,
`--count2`, `--long-lengths`, `--score-cutoff`, `--iterations`, `--seed`.
Each result line shows the elapsed time, the rate and the time per item.

## What this package does not do

It offers only the Levenshtein, LCS and Hamming metrics. There are no fuzzy
ratio scores (partial or token-based), no Indel, Jaro or Damerau-Levenshtein
metrics as public functions, and no helpers for picking the best matches out
of a list of choices.

## Running the tests

```
pip install -e ".[test]"
pytest
```