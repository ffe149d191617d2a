"""Plain-text report rendering."""

from __future__ import annotations

from pathlib import Path

from passtek.models import Labels, Stats
from passtek.utils import (
    get_max_length,
    max_label_length,
    sort_map_by_value_desc,
    sum_length_range,
)


def _header(title: str) -> str:
    return f"\n=== {title} ===\n"


def _row(label: str, width: int, value: int) -> str:
    return f"{label:<{width}} : {value}\n"


def render_text(stats: Stats, top: int, labels: Labels) -> str:
    """Render the statistics as a plain-text report."""
    if top < 0:
        raise ValueError(f"top must not be negative, got {top}")
    parts: list[str] = []

    hashes = stats.hashes
    if hashes.is_hash:
        hl = labels.hash
        width = max_label_length(
            hl.total_ntlm, hl.unique_ntlm, hl.reused, hl.lm, hl.empty_ntlm, hl.user_equal_hash
        )
        parts.append(_header(hl.title))
        parts.append(_row(hl.total_ntlm, width, hashes.total_ntlm_hashes))
        parts.append(_row(hl.cracked, width, stats.cracked_count))
        parts.append(_row(hl.unique_ntlm, width, hashes.unique_ntlm_hashes))
        parts.append(_row(hl.reused, width, hashes.reused_ntlm_hashes))
        parts.append(_row(hl.lm, width, hashes.is_lm))
        parts.append(_row(hl.empty_ntlm, width, hashes.empty_ntlm_hashes))
        if hashes.user_equal_hash:
            parts.append(_row(hl.user_equal_hash, width, len(hashes.user_equal_hash)))
    else:
        rl = labels.reuse
        width = max_label_length(rl.short, rl.unique)
        parts.append(_header(rl.title))
        parts.append(_row(rl.total, width, stats.cracked_count))
        parts.append(_row(rl.unique, width, stats.cracked_count - hashes.reused_ntlm_hashes))
        parts.append(_row(rl.short, width, hashes.reused_ntlm_hashes))

    ll = labels.length
    width = max_label_length(ll.short, ll.exact8, ll.exact9, ll.exact10, ll.long)
    parts.append(_header(ll.title))
    parts.append(_row(ll.short, width, sum_length_range(stats.lengths, 0, 7)))
    parts.append(_row(ll.exact8, width, stats.lengths.get(8, 0)))
    parts.append(_row(ll.exact9, width, stats.lengths.get(9, 0)))
    parts.append(_row(ll.exact10, width, stats.lengths.get(10, 0)))
    parts.append(_row(ll.long, width, sum_length_range(stats.lengths, 11, 100)))

    cl = labels.complexity
    width = max_label_length(cl.one, cl.two, cl.three, cl.four)
    parts.append(_header(cl.title))
    for level, label in enumerate((cl.one, cl.two, cl.three, cl.four), start=1):
        parts.append(_row(label, width, stats.complexity.get(level, 0)))

    pl = labels.pattern
    sections = (
        (_header(labels.occurrences.title), stats.token_count),
        (
            f"\n=== {pl.title} === (l = {pl.l}, u = {pl.u}, d = {pl.d}, s = {pl.s})\n",
            stats.patterns,
        ),
        (_header(labels.mostreuse.title), stats.mostreuse),
    )
    # The row limit only ever shrinks from one section to the next.
    for header, counts in sections:
        parts.append(header)
        entries = sort_map_by_value_desc(counts)
        width = get_max_length(counts)
        top = min(top, len(entries))
        parts.extend(_row(entry.key, width, entry.value) for entry in entries[:top])

    return "".join(parts)


def to_text(stats: Stats, output_dir: str | Path, top: int, labels: Labels) -> Path:
    """Write report.txt into output_dir and return its path."""
    path = Path(output_dir) / "report.txt"
    content = render_text(stats, top, labels)
    with open(path, "w", encoding="utf-8", newline="") as handle:
        handle.write(content)
    return path