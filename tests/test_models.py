import pytest

from passtek.models import Data, Entry, HashStats, Labels, Stats


def test_from_dict_reads_exact_keys():
    labels = Labels.from_dict(
        {
            "Length": {"A1": "Length", "short": "Short ones", "exact10": "Ten"},
            "Risk": {"low": "Low", "critical": "Critical"},
            "Hash": {"totalNTLM": "Total NTLM", "userEqualHash": "User = hash"},
        }
    )
    assert labels.length.a1 == "Length"
    assert labels.length.short == "Short ones"
    assert labels.length.exact10 == "Ten"
    assert labels.risk.low == "Low"
    assert labels.risk.critical == "Critical"
    assert labels.hash.total_ntlm == "Total NTLM"
    assert labels.hash.user_equal_hash == "User = hash"


def test_from_dict_matches_keys_case_insensitively():
    labels = Labels.from_dict({"risk": {"LOW": "low-risk"}, "pattern": {"L": "lower"}})
    assert labels.risk.low == "low-risk"
    assert labels.pattern.l == "lower"


def test_from_dict_nested_html_content():
    labels = Labels.from_dict(
        {"html": {"global_title": "Report", "summary": {"title": "Sum", "text": "<b>x</b>"}, "IsLogo": "hidden"}}
    )
    assert labels.html.global_title == "Report"
    assert labels.html.summary.title == "Sum"
    assert labels.html.summary.text == "<b>x</b>"
    assert labels.html.is_logo == "hidden"


def test_missing_and_null_keep_defaults():
    labels = Labels.from_dict({"Reuse": None, "Total": {"title": None}})
    assert labels.reuse.title == ""
    assert labels.total.title == ""


def test_wrong_type_raises():
    with pytest.raises(ValueError):
        Labels.from_dict({"Risk": {"low": 3}})
    with pytest.raises(ValueError):
        Labels.from_dict({"Risk": "text"})


def test_stats_defaults_are_independent():
    first = Stats()
    second = Stats()
    first.lengths[8] = 1
    first.hashes.user_equal_hash.append("alice")
    assert second.lengths == {}
    assert second.hashes.user_equal_hash == []


def test_data_defaults_and_entry():
    data = Data()
    assert data.stats.cracked_count == 0
    assert data.labels.length.title == ""
    entry = Entry("pass", 3)
    assert (entry.key, entry.value) == ("pass", 3)
    assert HashStats().is_hash is False