"""Password and hash file analysis."""

from __future__ import annotations

import json
import logging
import math
import re
import unicodedata
from collections import Counter
from collections.abc import Iterator
from pathlib import Path

from Crypto.Hash import MD4

from passtek.models import Data, Entry, HashStats, Labels, Stats
from passtek.utils import merge_into_smaller, sort_map_by_value_desc

log = logging.getLogger(__name__)

EMPTY_LM = "aad3b435b51404eeaad3b435b51404ee"
EMPTY_NTLM = "31d6cfe0d16ae931b73c59d7e0c089c0"

_TOKEN_RE = re.compile(r"[A-Za-z01345$!|@é]{4,}")
_SURROGATES = re.compile("[\ud800-\udfff]")

_LEET = str.maketrans(
    {
        "0": "o",
        "1": "i",
        "3": "e",
        "4": "a",
        "5": "s",
        "$": "s",
        "!": "i",
        "|": "i",
        "@": "a",
        "é": "e",
        "è": "e",
        "à": "a",
        "ù": "u",
        "ç": "c",
        "ï": "i",
    }
)


class AnalysisError(Exception):
    """Raised when an input file cannot be analysed."""


def _raw_lines(path: str | Path) -> Iterator[bytes]:
    """Yield the lines of a file without their line terminator (LF or CRLF)."""
    with open(path, "rb") as handle:
        for raw in handle:
            raw = raw.rstrip(b"\n")
            if raw.endswith(b"\r"):
                raw = raw[:-1]
            yield raw


def _text_lines(path: str | Path) -> Iterator[str]:
    for raw in _raw_lines(path):
        yield raw.decode("utf-8", errors="replace")


def classify_char(char: str) -> str:
    """Classify a character as 'u' (upper), 'l' (lower), 'd' (digit) or 's' (other)."""
    category = unicodedata.category(char)
    if category == "Lu":
        return "u"
    if category == "Ll":
        return "l"
    if category == "Nd":
        return "d"
    return "s"


def count_categories(password: str) -> tuple[int, int]:
    """Return the UTF-8 byte length and the number of character classes used."""
    classes = {classify_char(char) for char in password}
    return len(password.encode("utf-8")), len(classes)


def unleet(token: str) -> str:
    """Replace common leet-speak characters with their alphabetic equivalents."""
    return token.translate(_LEET)


def truncate_leet_suffix(token: str) -> str:
    """Drop a final 'i', 'e', 'a', 's' or 'o' when at least four characters remain."""
    if len(token) < 5:
        return token
    if token[-1] in "ieaso":
        return token[:-1]
    return token


def _first_count(entries: list[Entry]) -> int:
    return entries[0].value if entries else 0


def _consolidate_tokens(token_count: dict[str, int], min_length: int) -> dict[str, int]:
    plain = merge_into_smaller(sort_map_by_value_desc(token_count))

    truncated: dict[str, int] = {}
    for token, count in token_count.items():
        base = truncate_leet_suffix(token)
        key = base if len(base) >= min_length else token
        truncated[key] = truncated.get(key, 0) + count
    stripped = merge_into_smaller(sort_map_by_value_desc(truncated))

    chosen = stripped if _first_count(stripped) > _first_count(plain) else plain
    return {entry.key: entry.value for entry in chosen}


def analyze_passwords(filename: str | Path, min_char_occurrences: int) -> Data:
    """Compute statistics over a file holding one plaintext password per line.

    Raises AnalysisError when the file holds fewer than two passwords.
    """
    stats = Stats()
    line_count = 0
    for raw in _raw_lines(filename):
        if not raw:
            continue
        line = raw.decode("utf-8", errors="replace")
        line_count += 1
        _, category = count_categories(line)
        length = len(raw)
        stats.lengths[length] = stats.lengths.get(length, 0) + 1
        stats.complexity[category] = stats.complexity.get(category, 0) + 1
        stats.mostreuse[line] = stats.mostreuse.get(line, 0) + 1
        stats.cracked_count += 1

        pattern = "".join(classify_char(char) for char in line)
        stats.patterns[pattern] = stats.patterns.get(pattern, 0) + 1

        for match in _TOKEN_RE.findall(line):
            token = unleet(match.lower())
            if len(token.encode("utf-8")) >= min_char_occurrences:
                stats.token_count[token] = stats.token_count.get(token, 0) + 1

    stats.token_count = _consolidate_tokens(stats.token_count, min_char_occurrences)

    if line_count < 2:
        raise AnalysisError("Password file must contain at least 2 passwords")

    stats.cracked_reuse_count = sum(n for n in stats.mostreuse.values() if n > 1)
    return Data(stats=stats, labels=Labels())


def _hash_fields(hash_file: str | Path) -> Iterator[list[str]]:
    """Yield the colon-separated fields of well-formed hash lines."""
    try:
        lines = list(_text_lines(hash_file))
    except OSError as exc:
        raise AnalysisError(f"cannot open {hash_file}: {exc}") from exc
    for line in lines:
        line = line.strip()
        if not line:
            continue
        parts = line.split(":")
        if len(parts) < 4:
            continue
        yield parts


def analyze_hashes(hash_file: str | Path) -> HashStats:
    """Aggregate statistics of a pwdump-style file (user:rid:lm:nt:::)."""
    stats = HashStats()
    seen: Counter[str] = Counter()
    for parts in _hash_fields(hash_file):
        lm, ntlm = parts[2], parts[3]
        if ntlm == "" or ntlm.casefold() == EMPTY_NTLM:
            stats.empty_ntlm_hashes += 1
        stats.total_ntlm_hashes += 1
        seen[ntlm] += 1
        if lm and lm.casefold() != EMPTY_LM:
            stats.is_lm += 1

    stats.unique_ntlm_hashes = sum(1 for count in seen.values() if count == 1)
    stats.reused_ntlm_hashes = stats.total_ntlm_hashes - stats.unique_ntlm_hashes
    return stats


def _round_half_away(value: float, digits: int) -> float:
    scale = 10**digits
    return math.copysign(math.floor(abs(value) * scale + 0.5), value) / scale


def evaluate_risk(lang: str, *args: float, lang_dir: str | Path = "lang") -> tuple[str, float]:
    """Average the given percentages and map the score to a localised risk level."""
    if not args:
        return "N/A", 0.0

    score = _round_half_away(sum(args) / len(args), 2)

    path = Path(lang_dir) / f"{lang}.json"
    try:
        with open(path, encoding="utf-8") as handle:
            labels = Labels.from_dict(json.load(handle))
    except (OSError, ValueError) as exc:
        log.warning("Failed to load language file %s: %s", path, exc)
        labels = Labels()

    risk = labels.risk
    if score < 25:
        return risk.low, score
    if score < 50:
        return risk.medium, score
    if score < 75:
        return risk.high, score
    return risk.critical, score


def ntlm_hash(password: str) -> str:
    """Return the NTLM hash (MD4 of UTF-16LE) of the given string as hex."""
    cleaned = _SURROGATES.sub("\ufffd", password)
    return MD4.new(cleaned.encode("utf-16-le")).hexdigest()


def username_as_pass(hash_file: str | Path) -> list[str]:
    """Return the accounts whose NTLM hash is the hash of their own username."""
    matches = []
    for parts in _hash_fields(hash_file):
        account = parts[0].rpartition("\\")[2]
        ntlm = parts[3].lower()
        if not ntlm:
            continue
        if ntlm_hash(account) == ntlm:
            matches.append(account)
    return matches