# fuzzfind

Building blocks for a fuzzy line filter, as a pure-Python library with no
dependencies:

- `fuzzfind.fuzzy`: fuzzy matchers that score a candidate line, with bonuses
  for matches at word boundaries, after delimiters and on camelCase humps or
  digits, and penalties for gaps
- `fuzzfind.exact`: exact, word-boundary, prefix, suffix and whole-line
  matchers
- `fuzzfind.scoring`: the character classes, bonus values and named scoring
  schemes that the matchers share
- `fuzzfind.normalize`: folding of accented Latin letters to their base
  letter, so that `Danço` can match `danco`
- `fuzzfind.ansi`: a parser for ANSI escape sequences that strips colours,
  attributes and OSC 8 hyperlinks from a line and keeps them as offsets
- `fuzzfind.item`, `fuzzfind.chunklist`, `fuzzfind.cache`: items, chunked
  item storage with snapshots, and a per-chunk cache of query results
- `fuzzfind.history`: a query history kept in a text file
- `fuzzfind.tempfiles`: writing lists of strings to temporary files
- `fuzzfind.constants`: limits, timings, `EventType` and `ExitCode`

## Installation

```
pip install fuzzfind
```

## Matching

Every matcher takes the same arguments,
`(case_sensitive, normalize, forward, text, pattern, with_pos=False)`, and
returns a pair `(MatchResult, positions)`. A `MatchResult` has `start`, `end`
and `score`, plus a `matched` property; when nothing matches,
`start == end == -1`.

```python
from fuzzfind.scoring import init_scheme
from fuzzfind.fuzzy import fuzzy_match_v1, fuzzy_match_v2
from fuzzfind.exact import exact_match_naive, prefix_match

init_scheme("default")          # or "path", "history"

result, positions = fuzzy_match_v2(
    case_sensitive=False, normalize=False, forward=True,
    text="foo bar baz", pattern="fbb", with_pos=True,
)
print(result.start, result.end, result.score, positions)

result, _ = exact_match_naive(False, False, True, "fooBarbaz", "oba")
```

- `fuzzy_match_v2` finds the highest-scoring alignment of the pattern. With
  `with_pos=True` it also returns the matched positions in ascending order.
- `fuzzy_match_v1` is greedy. It finds the first occurrence and then shrinks
  it by scanning backwards. `calculate_score` scores a span the same way the
  optimal matcher does.
- `exact_match_naive` and `exact_match_boundary` (whole words only),
  `prefix_match`, `suffix_match` and `equal_match` never return positions. The
  prefix, suffix and equality matchers ignore surrounding whitespace in the
  text unless the pattern starts or ends with whitespace.
- `forward=False` prefers the last occurrence over the first.

When matching case-insensitively, pass the pattern in lower case. When
`normalize` is set, pass a pattern that has already been through
`fuzzfind.normalize.normalize_text`.

`init_scheme(name)` sets the scheme that all matchers use and returns it.
`active_scheme()` returns the scheme in effect. `Scheme.from_name` raises
`ValueError` for an unknown name. The `path` scheme treats the path separator
as the delimiter and counts the start of the text as following one.

## ANSI colours

```python
from fuzzfind.ansi import extract_color

text, offsets, state = extract_color("hello \x1b[31mworld", None, None)
# text == "hello world"; offsets holds one AnsiOffset spanning 6 to 11
```

`extract_color` returns the plain text, a list of `AnsiOffset(start, end,
color)` runs (or `None` when nothing is coloured) and the `AnsiState` at the
end of the line. To carry colours over from one line to the next, pass that
state in the next call. `AnsiState.to_string()` gives back an escape sequence
that reproduces a state. `interpret_code`, `parse_ansi_code` and
`next_ansi_escape_sequence` expose the lower-level parsing steps.

## Items, chunks and the cache

`Item(text, index=0, orig_text=None, colors=[], transformed=None)` is one input
line. `as_string(strip_ansi)` returns the original line, with or without its
escape sequences.

`ChunkList(cache, trans)` stores items in chunks of `CHUNK_SIZE` (100). `push(data)`
calls `trans(data)`, which returns an item, or `None` to skip the line.
`snapshot(tail=0)` returns `(chunks, count, changed)`, a view that later pushes
do not change. With a positive `tail`, it keeps only the last `tail` items, and
the discarded items are gone for good.

`ChunkCache` keeps the results of queries on full chunks (`add`, `lookup`,
`search`, `retire`, `clear`). It stores no more than `QUERY_CACHE_MAX`
results per query. `search` returns the results cached for the longest prefix
or suffix of a query.

## History

```python
from fuzzfind.history import History

history = History("/tmp/my-history", 1000)
history.append("some query")
history.previous()
```

`History` creates the file if it does not exist. It raises `HistoryError`
when it cannot read or create the file. `append` ignores empty lines, keeps at
most `max_size` entries and saves the file. `override` changes the entry
under the cursor in memory only.

## What this package does not do

There is no command-line program and no interactive screen. Nothing reads
input from a command or walks a directory tree, nothing parses a query
language of several search terms, and nothing runs a search over a whole
`ChunkList` in parallel or merges and ranks the results. The package supplies
the matchers, parsing and storage that such a program would be built on.