from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .contracts import ScanToPdfConfig, ScanToPdfError, ScanToPdfErrorCode, ScanToPdfResult
from .data_access import write_bytes_atomic
from .module import run_scan_to_pdf


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="scan-to-pdf",
        description=(
            "Flatten near-white background to white, boost darker content, "
            "and save the image as a single-page PDF next to the input."
        ),
    )
    # Optional at the argparse level so a missing path exits 1 with our own message.
    p.add_argument("input", nargs="?", default=None, type=Path, help="Input image path.")
    p.add_argument(
        "--out-manifest",
        type=Path,
        default=None,
        help="Optional JSON file describing the run (written on success and failure).",
    )
    p.add_argument(
        "--compute-source-sha256",
        action="store_true",
        help="Include SHA-256 of the source image in the manifest meta.",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Log each pipeline stage.")
    return p


def _describe(error: ScanToPdfError) -> str:
    if error.code in (ScanToPdfErrorCode.MISSING_ARGUMENT.value, ScanToPdfErrorCode.INPUT_NOT_FOUND.value):
        return error.message
    return f"Error processing image ({error.stage}): {error.message}"


def _run_record(result: ScanToPdfResult, exit_code: int) -> dict:
    error = result.error
    return {
        "exit_code": exit_code,
        "input": result.source_path,
        "output": result.output_path,
        "page": result.page,
        "error": None if error is None else {"code": error.code, "stage": error.stage, "message": error.message},
        "meta": result.meta,
    }


def _write_manifest(path: Path, record: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = json.dumps(record, ensure_ascii=False, sort_keys=True, indent=2) + "\n"
    write_bytes_atomic(path, payload.encode("utf-8"))


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = ScanToPdfConfig(compute_source_sha256=args.compute_source_sha256)
    result = run_scan_to_pdf(config=config, input_path=args.input)

    if result.ok:
        exit_code = 0
        print(f"Processed PDF saved to: {result.output_path}")
    else:
        exit_code = 1
        error = result.error
        print(_describe(error), file=sys.stderr)
        if error.code == ScanToPdfErrorCode.MISSING_ARGUMENT.value:
            parser.print_usage(sys.stderr)

    if args.out_manifest is not None:
        try:
            _write_manifest(args.out_manifest, _run_record(result, exit_code))
        except OSError as e:
            print(f"Error processing image (manifest): {e}", file=sys.stderr)
            return 1

    return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
