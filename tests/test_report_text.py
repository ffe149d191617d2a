import pytest

from passtek.models import (
    ComplexityLabels,
    HashLabels,
    HashStats,
    Labels,
    LengthLabels,
    MostreuseLabels,
    OccurrencesLabels,
    PatternLabels,
    ReuseLabels,
    Stats,
)
from passtek.report_text import render_text, to_text


@pytest.fixture
def labels():
    result = Labels()
    result.hash = HashLabels(
        total_ntlm="Total NTLM", cracked="Cracked", unique_ntlm="Unique NTLM",
        reused="Reused NTLM", lm="LM", empty_ntlm="Empty NTLM", title="Hashes",
        user_equal_hash="User equals hash",
    )
    result.length = LengthLabels(
        title="Length", short="Short", exact8="Exactly 8", exact9="Exactly 9",
        exact10="Exactly 10", long="Long",
    )
    result.complexity = ComplexityLabels(
        title="Complexity", one="One class", two="Two", three="Three", four="Four",
    )
    result.occurrences = OccurrencesLabels(title="Occurrences")
    result.pattern = PatternLabels(title="Patterns", l="lower", u="upper", s="special", d="digit")
    result.mostreuse = MostreuseLabels(title="Most reused")
    result.reuse = ReuseLabels(title="Reuse", total="Total", short="Reused", unique="Unique")
    return result


@pytest.fixture
def stats():
    return Stats(
        cracked_count=17,
        lengths={6: 2, 8: 3, 9: 4, 10: 1, 15: 7},
        complexity={1: 5, 2: 6, 3: 4, 4: 2},
        patterns={"lllll": 4},
        mostreuse={"alpha": 1, "beta": 1, "gamma": 1},
        token_count={"alpha": 3, "beta": 2, "gamma": 1},
        hashes=HashStats(reused_ntlm_hashes=6),
    )


def _section(text, title):
    lines = text.split("\n")
    for i, line in enumerate(lines):
        if line.startswith(f"=== {title} ==="):
            rows = []
            for row in lines[i + 1:]:
                if not row:
                    break
                rows.append(row)
            return rows
    raise AssertionError(f"section {title!r} not found")


def _values(rows):
    return {label.strip(): value for label, _, value in (r.rpartition(" : ") for r in rows)}


def test_reuse_section_without_hashes(stats, labels):
    text = render_text(stats, 5, labels)
    assert "=== Hashes ===" not in text
    assert _values(_section(text, "Reuse")) == {
        "Total": str(stats.cracked_count),
        "Unique": str(stats.cracked_count - stats.hashes.reused_ntlm_hashes),
        "Reused": str(stats.hashes.reused_ntlm_hashes),
    }


def test_hash_section(stats, labels):
    stats.hashes = HashStats(
        total_ntlm_hashes=40, unique_ntlm_hashes=30, reused_ntlm_hashes=10,
        is_lm=2, is_hash=True, empty_ntlm_hashes=3,
    )
    text = render_text(stats, 5, labels)
    assert "=== Reuse ===" not in text
    values = _values(_section(text, "Hashes"))
    assert values == {
        "Total NTLM": "40", "Cracked": "17", "Unique NTLM": "30",
        "Reused NTLM": "10", "LM": "2", "Empty NTLM": "3",
    }

    stats.hashes.user_equal_hash = ["alice", "bob"]
    values = _values(_section(render_text(stats, 5, labels), "Hashes"))
    assert values["User equals hash"] == "2"


def test_length_and_complexity(stats, labels):
    text = render_text(stats, 5, labels)
    assert _values(_section(text, "Length")) == {
        "Short": "2", "Exactly 8": "3", "Exactly 9": "4", "Exactly 10": "1", "Long": "7",
    }
    assert _values(_section(text, "Complexity")) == {
        "One class": "5", "Two": "6", "Three": "4", "Four": "2",
    }


def test_rows_are_aligned(stats, labels):
    text = render_text(stats, 5, labels)
    for title in ("Length", "Complexity", "Occurrences"):
        rows = _section(text, title)
        assert len({row.rfind(" : ") for row in rows}) == 1


def test_pattern_header(stats, labels):
    text = render_text(stats, 5, labels)
    assert "=== Patterns === (l = lower, u = upper, d = digit, s = special)" in text


def test_top_limit_cascades(stats, labels):
    text = render_text(stats, 5, labels)
    occurrences = _section(text, "Occurrences")
    assert [row.rpartition(" : ")[0].strip() for row in occurrences] == ["alpha", "beta", "gamma"]
    assert len(_section(text, "Patterns")) == len(stats.patterns)
    assert len(_section(text, "Most reused")) == len(stats.patterns)


def test_top_limits_rows(stats, labels):
    text = render_text(stats, 1, labels)
    assert _values(_section(text, "Occurrences")) == {"alpha": "3"}


def test_negative_top_rejected(stats, labels):
    with pytest.raises(ValueError):
        render_text(stats, -1, labels)


def test_report_starts_with_section(stats, labels):
    assert render_text(stats, 5, labels).startswith("\n=== Reuse ===\n")


def test_to_text_writes_report(tmp_path, stats, labels):
    path = to_text(stats, tmp_path, 5, labels)
    assert path == tmp_path / "report.txt"
    assert path.read_text(encoding="utf-8") == render_text(stats, 5, labels)