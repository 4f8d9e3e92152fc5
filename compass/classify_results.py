"""
compass.classify_results — CLI for classifying a saved results file.

Usage:
    python -m compass.classify_results results.json
    python -m compass.classify_results results.json --json
    python -m compass.classify_results results.json --questions bank.json
    python -m compass.classify_results results.json --export out/
    python -m compass.classify_results results.json --quiet

Input:
    A persisted results record ({economic, social, answers, timestamp,
    categoryTallies}) or a bare analysis request. Records saved before
    tallies existed are backfilled from the answers.

    The default question bank is only read when the record lacks scores or
    tallies. A bank named with --questions is always read and validated.

Export:
    --export DIR writes the classified record, tallies included, to
    DIR/political-compass-results-YYYY-MM-DD.json.

Exit codes:
    0: Classified.
    1: Results file, question bank or export directory missing / unreadable.
    2: Invalid input — results record or question bank fails validation.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from pydantic import ValidationError

from compass.analysis import AnalysisRequest, analyze
from compass.hashing import compute_result_hash
from compass.questions import QuestionBank, QuestionBankError, load_question_bank
from compass.summary import axis_breakdown, build_results_record, export_filename, share_text

EXIT_OK: int = 0
EXIT_UNREADABLE: int = 1
EXIT_INVALID_INPUT: int = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="classify_results",
        description="Classify a saved political compass results file.",
    )
    parser.add_argument(
        "results",
        help="Path to a results JSON file.",
    )
    parser.add_argument(
        "--questions",
        type=str,
        default=None,
        help="Question bank JSON (default: QUESTION_BANK_PATH or the bundled bank).",
    )
    parser.add_argument(
        "--export",
        type=str,
        default=None,
        metavar="DIR",
        help="Write the classified results record into DIR.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        dest="json_output",
        help="Output the analysis as JSON.",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress all output. Exit code only.",
    )
    return parser


def _error(message: str, quiet: bool) -> None:
    if not quiet:
        print(f"error: {message}", file=sys.stderr)


def _needs_bank(request: AnalysisRequest) -> bool:
    return (
        request.economic_score is None
        or request.social_score is None
        or request.category_tallies is None
    )


def main(argv: list[str] | None = None) -> int:
    """Classify one results file. Returns exit code."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    results_path = Path(args.results)
    try:
        with open(results_path, encoding="utf-8") as fh:
            raw = json.load(fh)
    except OSError as exc:
        _error(f"cannot read {results_path}: {exc.strerror or exc}", args.quiet)
        return EXIT_UNREADABLE
    except json.JSONDecodeError as exc:
        _error(f"{results_path} is not valid JSON: {exc.msg}", args.quiet)
        return EXIT_INVALID_INPUT
    except UnicodeDecodeError as exc:
        _error(f"{results_path} is not valid UTF-8: {exc.reason}", args.quiet)
        return EXIT_INVALID_INPUT

    if not isinstance(raw, dict):
        _error(f"{results_path} must contain a JSON object", args.quiet)
        return EXIT_INVALID_INPUT

    try:
        request = AnalysisRequest.model_validate(raw)
    except ValidationError as exc:
        _error(f"invalid results record: {exc.error_count()} error(s)", args.quiet)
        return EXIT_INVALID_INPUT

    bank: QuestionBank | None = None
    if args.questions is not None or _needs_bank(request):
        try:
            bank = load_question_bank(args.questions)
        except FileNotFoundError as exc:
            _error(str(exc), args.quiet)
            return EXIT_UNREADABLE
        except QuestionBankError as exc:
            _error(str(exc), args.quiet)
            return EXIT_INVALID_INPUT

    result = analyze(request, bank)
    profile = result.profile

    if args.export is not None:
        target = Path(args.export) / export_filename()
        record = build_results_record(
            result.economic,
            result.social,
            request.answers,
            result.category_tallies,
        )
        try:
            target.write_text(json.dumps(record, indent=2) + "\n", encoding="utf-8")
        except OSError as exc:
            _error(f"cannot write {target}: {exc.strerror or exc}", args.quiet)
            return EXIT_UNREADABLE
        if not args.quiet:
            print(f"saved: {target}", file=sys.stderr)

    if args.quiet:
        return EXIT_OK

    if args.json_output:
        payload = result.to_dict()
        payload["resultHash"] = compute_result_hash(result.economic, result.social, profile)
        print(json.dumps(payload, indent=2, ensure_ascii=False))
        return EXIT_OK

    breakdown = axis_breakdown(result.economic, result.social)
    econ = breakdown["economic"]
    soc = breakdown["social"]
    print(f"Economic: {result.economic:+.1f}  ({econ['intensity']} {econ['direction']})")
    print(f"Social:   {result.social:+.1f}  ({soc['intensity']} {soc['direction']})")
    print(f"Primary:  {profile.primary_ideology}")
    if profile.secondary_ideologies:
        print("Related:")
        for label in profile.secondary_ideologies:
            print(f"  • {label}")
    print()
    print(share_text(profile, result.economic, result.social))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
