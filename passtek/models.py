"""Data structures shared by the analysis and reporting code."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any


def _text(key: str) -> Any:
    return field(default="", metadata={"json": key})


def _nested(key: str, cls: type) -> Any:
    return field(default_factory=cls, metadata={"json": key, "type": cls})


def _decode(cls: type, data: Any) -> Any:
    """Build a label dataclass from a JSON mapping.

    Keys are matched exactly first, then case-insensitively. Missing keys and
    null values keep the field's default; values of the wrong type raise
    ValueError.
    """
    if not isinstance(data, Mapping):
        raise ValueError(f"expected an object for {cls.__name__}, got {type(data).__name__}")
    folded: dict[str, Any] = {}
    for key, value in data.items():
        folded.setdefault(str(key).casefold(), value)

    kwargs: dict[str, Any] = {}
    for spec in fields(cls):
        key = spec.metadata.get("json")
        if key is None:
            continue
        if key in data:
            value = data[key]
        elif key.casefold() in folded:
            value = folded[key.casefold()]
        else:
            continue
        if value is None:
            continue
        nested = spec.metadata.get("type")
        if nested is not None:
            kwargs[spec.name] = _decode(nested, value)
        elif isinstance(value, str):
            kwargs[spec.name] = value
        else:
            raise ValueError(
                f"field {key!r} of {cls.__name__} expects a string, got {type(value).__name__}"
            )
    return cls(**kwargs)


@dataclass
class Entry:
    """A key and its count."""

    key: str
    value: int


@dataclass
class HashStats:
    """Aggregated statistics of a pwdump-style hash file."""

    total_ntlm_hashes: int = 0
    unique_ntlm_hashes: int = 0
    reused_ntlm_hashes: int = 0
    is_lm: int = 0
    is_hash: bool = False
    empty_ntlm_hashes: int = 0
    user_equal_hash: list[str] = field(default_factory=list)


@dataclass
class Stats:
    """Statistics resulting from password analysis."""

    cracked_count: int = 0
    total_count: int = 0
    lengths: dict[int, int] = field(default_factory=dict)
    complexity: dict[int, int] = field(default_factory=dict)
    patterns: dict[str, int] = field(default_factory=dict)
    mostreuse: dict[str, int] = field(default_factory=dict)
    cracked_reuse_count: int = 0
    total_reuse_count: int = 0
    token_count: dict[str, int] = field(default_factory=dict)
    hashes: HashStats = field(default_factory=HashStats)
    global_percent: float = 0.0
    risk: str = ""
    top: int = 0


@dataclass
class Content:
    title: str = _text("title")
    text: str = _text("text")


@dataclass
class HtmlLabels:
    global_title: str = _text("global_title")
    is_logo: str = _text("IsLogo")
    logo64: str = _text("Logo64")
    icon64: str = _text("Icon64")
    is_client_logo: str = _text("IsClientLogo")
    client_logo64: str = _text("ClientLogo64")
    summary: Content = _nested("summary", Content)
    length: Content = _nested("length", Content)
    complexity: Content = _nested("complexity", Content)
    occurrences: Content = _nested("occurrences", Content)
    patterns: Content = _nested("patterns", Content)
    mostreuse: Content = _nested("mostreuse", Content)
    reuse: Content = _nested("reuse", Content)
    remediation: Content = _nested("remediation", Content)


@dataclass
class LengthLabels:
    a1: str = _text("A1")
    b1: str = _text("B1")
    title: str = _text("title")
    short: str = _text("short")
    exact8: str = _text("exact8")
    exact9: str = _text("exact9")
    exact10: str = _text("exact10")
    long: str = _text("long")


@dataclass
class ComplexityLabels:
    a1: str = _text("A1")
    b1: str = _text("B1")
    title: str = _text("title")
    one: str = _text("one")
    two: str = _text("two")
    three: str = _text("three")
    four: str = _text("four")


@dataclass
class OccurrencesLabels:
    title: str = _text("title")
    a1: str = _text("A1")
    b1: str = _text("B1")


@dataclass
class PatternLabels:
    title: str = _text("title")
    a1: str = _text("A1")
    b1: str = _text("B1")
    l: str = _text("l")  # noqa: E741
    u: str = _text("u")
    s: str = _text("s")
    d: str = _text("d")


@dataclass
class MostreuseLabels:
    title: str = _text("title")
    short: str = _text("short")
    a1: str = _text("A1")
    b1: str = _text("B1")


@dataclass
class ReuseLabels:
    title: str = _text("title")
    total: str = _text("total")
    short: str = _text("short")
    unique: str = _text("unique")
    a1: str = _text("A1")
    b1: str = _text("B1")


@dataclass
class HashLabels:
    total_ntlm: str = _text("totalNTLM")
    cracked: str = _text("cracked")
    unique_ntlm: str = _text("uniqueNTLM")
    reused: str = _text("reused")
    lm: str = _text("lm")
    empty_ntlm: str = _text("emptyNTLM")
    title: str = _text("title")
    user_equal_hash: str = _text("userEqualHash")


@dataclass
class TitleLabels:
    title: str = _text("title")


@dataclass
class RiskLabels:
    low: str = _text("low")
    medium: str = _text("medium")
    high: str = _text("high")
    critical: str = _text("critical")


@dataclass
class Labels:
    """All translation strings, structured by report section."""

    html: HtmlLabels = _nested("html", HtmlLabels)
    length: LengthLabels = _nested("Length", LengthLabels)
    complexity: ComplexityLabels = _nested("Complexity", ComplexityLabels)
    occurrences: OccurrencesLabels = _nested("Occurrences", OccurrencesLabels)
    pattern: PatternLabels = _nested("Pattern", PatternLabels)
    mostreuse: MostreuseLabels = _nested("Mostreuse", MostreuseLabels)
    reuse: ReuseLabels = _nested("Reuse", ReuseLabels)
    hash: HashLabels = _nested("Hash", HashLabels)
    total_cracked: TitleLabels = _nested("TotalCracked", TitleLabels)
    total: TitleLabels = _nested("Total", TitleLabels)
    risk: RiskLabels = _nested("Risk", RiskLabels)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Labels:
        """Build labels from a decoded language JSON document."""
        return _decode(cls, data)


@dataclass
class Data:
    """Statistics together with the labels used to present them."""

    stats: Stats = field(default_factory=Stats)
    labels: Labels = field(default_factory=Labels)