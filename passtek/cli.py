"""Command-line entry point: analyse a password list and write reports."""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path

from passtek.analysis import (
    AnalysisError,
    analyze_hashes,
    analyze_passwords,
    evaluate_risk,
    username_as_pass,
)
from passtek.models import Data
from passtek.report_text import to_text
from passtek.utils import (
    image_to_base64,
    load_labels,
    mask_stats,
    percent,
    split_output_types,
    sum_length_range,
)

_BANNER = """
     PASSTEK
     password audit statistics"""
_RULE = "\x1b[34m==============================================\x1b[0m"
_UNAVAILABLE_TYPES = frozenset({"html", "excel", "screenshot", "pdf"})


class _Fatal(Exception):
    """Aborts the command with an error message."""


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser of the command."""
    parser = argparse.ArgumentParser(
        prog="passtek",
        description="Compute statistics over cracked passwords and write reports.",
        allow_abbrev=False,
    )
    parser.add_argument("-p", dest="password_file", default="", help="Password file (one per line)")
    parser.add_argument(
        "-f",
        dest="output_types",
        default="all",
        help="Output types (text, html, excel, screenshot, pdf, all)",
    )
    parser.add_argument("-l", dest="lang", default="fr", help="Output language (en, fr)")
    parser.add_argument("-o", dest="output_dir", default="output", help="Output directory")
    parser.add_argument(
        "-H", dest="hash_file", default="", help="Hash file (username:rid:lmhash:nthash:::)"
    )
    parser.add_argument("-L", dest="logo", default="", help="Company logo file (png)")
    parser.add_argument("-cL", dest="client_logo", default="", help="Client logo file (png)")
    parser.add_argument(
        "-anon",
        dest="anon",
        action="store_true",
        help="Anonymize passwords (show first 2 and last 2 characters)",
    )
    parser.add_argument(
        "-min",
        dest="min_char_occurrences",
        type=int,
        default=5,
        help="Minimum number of characters to be considered as an occurrence",
    )
    parser.add_argument(
        "-top", dest="top", type=int, default=5, help="Top N entries to display"
    )
    parser.add_argument(
        "--lang-dir", dest="lang_dir", default="lang", help="Directory holding <lang>.json files"
    )
    return parser


def resolve_output_dir(output_dir: str, base_dir: str | Path | None = None) -> str:
    """Return output_dir relative to base_dir, refusing paths that leave it."""
    base = os.path.abspath(base_dir if base_dir is not None else os.getcwd())
    target = os.path.normpath(os.path.join(base, output_dir))
    try:
        rel = os.path.relpath(target, base)
    except ValueError as exc:
        raise ValueError("invalid output path: outside working directory is not allowed") from exc
    if rel.startswith("..") or os.path.isabs(rel):
        raise ValueError("invalid output path: outside working directory is not allowed")
    return rel


def _status(message: str) -> None:
    print(f"... {message}")


def _collect_hash_stats(data: Data, hash_file: str) -> None:
    stats = data.stats
    _status("Analyzing hashes")
    try:
        stats.hashes = analyze_hashes(hash_file)
    except AnalysisError as exc:
        raise _Fatal(f"Error reading hashes: {exc}") from exc
    stats.hashes.is_hash = True

    try:
        stats.hashes.user_equal_hash = username_as_pass(hash_file)
    except AnalysisError as exc:
        print(f"[!] {exc}", file=sys.stderr)

    if stats.hashes.total_ntlm_hashes < stats.cracked_count:
        raise _Fatal(
            f"Hash file contains fewer lines ({stats.hashes.total_ntlm_hashes}) "
            f"than password file ({stats.cracked_count})"
        )


def _derive_hash_stats(data: Data) -> None:
    stats = data.stats
    print(
        "\x1b[33m[WARNING]\x1b[37m No hash file (-H) provided: some hash-based statistics "
        "will be based on password cracked data and may be less representative.\x1b[0m"
    )
    stats.hashes.total_ntlm_hashes = stats.cracked_count
    stats.hashes.reused_ntlm_hashes = stats.cracked_reuse_count
    stats.hashes.unique_ntlm_hashes = stats.cracked_count - stats.cracked_reuse_count
    stats.hashes.is_hash = False


def _evaluate(data: Data, lang: str, lang_dir: str) -> None:
    stats = data.stats
    hashes = stats.hashes
    metrics = [
        percent(hashes.reused_ntlm_hashes, hashes.total_ntlm_hashes),
        percent(
            sum(stats.complexity.get(level, 0) for level in (1, 2, 3)), stats.cracked_count
        ),
        percent(sum_length_range(stats.lengths, 0, 10), stats.cracked_count),
    ]
    if hashes.is_hash:
        metrics.append(percent(stats.cracked_count, hashes.total_ntlm_hashes))
    stats.risk, stats.global_percent = evaluate_risk(lang, *metrics, lang_dir=lang_dir)


def _load_language(data: Data, lang: str, lang_dir: str) -> None:
    path = Path(lang_dir) / f"{lang}.json"
    if not path.is_file():
        raise _Fatal(f"Language file not found: {lang}")
    try:
        data.labels = load_labels(path)
    except (OSError, json.JSONDecodeError, ValueError) as exc:
        raise _Fatal(f"Error loading language file: {exc}") from exc


def _load_logos(data: Data, logo: str, client_logo: str) -> None:
    html = data.labels.html
    if not logo:
        html.is_logo = "hidden"
    else:
        try:
            html.logo64 = image_to_base64(logo)
        except OSError as exc:
            raise _Fatal(f"Error loading logo: {exc}") from exc
    if not client_logo:
        html.is_client_logo = "hidden"
    else:
        try:
            html.client_logo64 = image_to_base64(client_logo)
        except OSError as exc:
            raise _Fatal(f"Error loading client logo: {exc}") from exc


def _write_outputs(data: Data, output_types: str, output_dir: str, top: int) -> None:
    for output in split_output_types(output_types):
        if output in ("text", "all"):
            _status("Generating text report")
            try:
                to_text(data.stats, output_dir, top, data.labels)
            except OSError as exc:
                raise _Fatal(f"Cannot write text report: {exc}") from exc
            print(f"[+] Saved text report to {output_dir}/report.txt")
        elif output in _UNAVAILABLE_TYPES:
            raise _Fatal(f"Output type not supported: {output}")
        else:
            raise _Fatal(f"Unknown output type: {output}")


def _run(args: argparse.Namespace) -> None:
    try:
        output_dir = resolve_output_dir(args.output_dir)
    except ValueError as exc:
        raise _Fatal(str(exc)) from exc

    if not args.password_file:
        raise _Fatal("Please specify an input file using -p")
    if not output_dir:
        raise _Fatal("Please specify an output directory using -o")
    if args.top < 0:
        raise _Fatal("-top must not be negative")

    try:
        os.mkdir(output_dir, 0o755)
    except FileExistsError:
        pass
    except OSError as exc:
        print(f"[!] Cannot create {output_dir}: {exc}", file=sys.stderr)

    _status("Analyzing passwords")
    try:
        data = analyze_passwords(args.password_file, args.min_char_occurrences)
    except (AnalysisError, OSError) as exc:
        raise _Fatal(f"Error reading passwords: {exc}") from exc
    data.stats.top = args.top

    if args.hash_file:
        _collect_hash_stats(data, args.hash_file)
    else:
        _derive_hash_stats(data)

    _status("Risk evaluation")
    _evaluate(data, args.lang, args.lang_dir)

    if args.anon:
        _status("Masking passwords")
        mask_stats(data.stats)

    _load_language(data, args.lang, args.lang_dir)
    _load_logos(data, args.logo, args.client_logo)
    _write_outputs(data, args.output_types, output_dir, args.top)


def main(argv: list[str] | None = None) -> int:
    """Run the command and return its exit status."""
    args = build_parser().parse_args(argv)
    print(_BANNER)
    print(_RULE)
    try:
        _run(args)
    except _Fatal as exc:
        print(f"[!] {exc}", file=sys.stderr)
        return 1
    print(_RULE + "\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())