"""Helpers for statistics, formatting and asset handling."""

from __future__ import annotations

import base64
import io
import json
import math
from collections.abc import Iterable, Mapping
from pathlib import Path

from PIL import Image

from passtek.models import Entry, Labels, Stats

_HTML_ESCAPES = str.maketrans(
    {"&": "&amp;", "'": "&#39;", "<": "&lt;", ">": "&gt;", '"': "&#34;"}
)


def _round_half_away(value: float) -> float:
    return math.copysign(math.floor(abs(value) + 0.5), value)


def percent(part: int, total: int) -> float:
    """Return part as a percentage of total, rounded to one decimal (0 if total is 0)."""
    if total == 0:
        return 0.0
    return _round_half_away(part / total * 1000) / 10


def sum_length_range(lengths: Mapping[int, int], minimum: int, maximum: int) -> int:
    """Sum the counts whose length key lies in [minimum, maximum]."""
    return sum(count for length, count in lengths.items() if minimum <= length <= maximum)


def get_max_length(counts: Mapping[str, int]) -> int:
    """Return the UTF-8 byte length of the longest key, or 0."""
    return max((len(key.encode("utf-8")) for key in counts), default=0)


def split_output_types(raw: str) -> list[str]:
    """Split a comma-separated list and strip each item."""
    return [item.strip() for item in raw.split(",")]


def sort_map_by_value_desc(counts: Mapping[str, int]) -> list[Entry]:
    """Return the mapping's items as entries, highest count first."""
    return sorted((Entry(key, value) for key, value in counts.items()), key=lambda e: -e.value)


def max_label_length(*args: str) -> int:
    """Return the UTF-8 byte length of the longest label, or 0."""
    return max((len(label.encode("utf-8")) for label in args), default=0)


def image_to_base64(path: str | Path) -> str:
    """Return the file's contents base64-encoded."""
    return base64.b64encode(Path(path).read_bytes()).decode("ascii")


def mask_password(password: str) -> str:
    """Keep the first two and last two characters, replacing the rest with '*'."""
    if len(password) <= 4:
        return password
    return password[:2] + "*" * (len(password) - 4) + password[-2:]


def mask_stats(stats: Stats) -> None:
    """Mask the plaintext passwords used as keys of the reuse counts."""
    stats.mostreuse = {mask_password(key): count for key, count in stats.mostreuse.items()}


def _escape_html(text: str) -> str:
    return text.translate(_HTML_ESCAPES)


def sanitize_stats(stats: Stats | None) -> None:
    """HTML-escape the keys of the reuse and token counts."""
    if stats is None:
        return
    stats.mostreuse = {_escape_html(k): v for k, v in stats.mostreuse.items()}
    stats.token_count = {_escape_html(k): v for k, v in stats.token_count.items()}


def resize_and_base64(path: str | Path, width: int, height: int) -> str:
    """Resize an image (0 keeps the original dimension) and return it as base64 PNG."""
    with Image.open(path) as img:
        img.load()
        width = width or img.width
        height = height or img.height
        resized = img.convert("RGBA").resize((width, height), Image.Resampling.BICUBIC)
    buffer = io.BytesIO()
    resized.save(buffer, format="PNG")
    return base64.b64encode(buffer.getvalue()).decode("ascii")


def merge_into_smaller(entries: Iterable[Entry]) -> list[Entry]:
    """Fold each entry into the first other entry whose key it contains.

    The count of an entry whose key contains another remaining key is added
    to that entry and the containing entry is dropped.
    """
    merged = [Entry(e.key, e.value) for e in entries]
    skipped: set[int] = set()
    for i, outer in enumerate(merged):
        if i in skipped:
            continue
        for j, inner in enumerate(merged):
            if i == j or j in skipped:
                continue
            if inner.key in outer.key:
                inner.value += outer.value
                skipped.add(i)
                break
    return [e for i, e in enumerate(merged) if i not in skipped]


def load_labels(path: str | Path) -> Labels:
    """Load labels from a language JSON file."""
    with open(path, encoding="utf-8") as handle:
        document = json.load(handle)
    return Labels.from_dict(document)