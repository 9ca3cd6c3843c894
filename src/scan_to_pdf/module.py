from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from contracts.raster import DecodeError, EncodingError, RasterStageError
from pdf_assemble import assemble_image_pdf
from raster_io import decode_raster, encode_raster
from tone_map import apply_tone_map

from .contracts import ScanToPdfConfig, ScanToPdfError, ScanToPdfErrorCode, ScanToPdfResult
from .data_access import derive_output_path, read_input_bytes, sha256_bytes, write_bytes_atomic

logger = logging.getLogger(__name__)


def _failed(
    *,
    source_path: str | None,
    code: ScanToPdfErrorCode,
    stage: str,
    message: str,
    detail: dict[str, Any] | None = None,
    meta: dict[str, Any],
) -> ScanToPdfResult:
    return ScanToPdfResult(
        ok=False,
        source_path=source_path,
        output_path=None,
        page=None,
        errors=[ScanToPdfError(code=code.value, stage=stage, message=message, detail=detail)],
        meta=meta,
    )


def _code_for(error: RasterStageError) -> ScanToPdfErrorCode:
    if isinstance(error, DecodeError):
        return ScanToPdfErrorCode.DECODE_ERROR
    if isinstance(error, EncodingError):
        return ScanToPdfErrorCode.ENCODING_ERROR
    raise TypeError(f"Unmapped raster stage error: {type(error).__name__}")


def run_scan_to_pdf(*, config: ScanToPdfConfig, input_path: str | Path | None) -> ScanToPdfResult:
    """
    Preferred programmatic entrypoint.

    Input: path of an encoded image
    Output: `<stem>_processed.pdf` next to the input + result describing the run

    Stages run strictly in order (read -> decode -> tone_map -> encode ->
    assemble -> write); the first failure ends the run with `ok=False` and
    nothing is written.
    """

    meta: dict[str, Any] = {"jpeg_quality": config.jpeg_quality, "engine": config.engine.value}

    if input_path is None or str(input_path).strip() == "":
        return _failed(
            source_path=None,
            code=ScanToPdfErrorCode.MISSING_ARGUMENT,
            stage="args",
            message="Please provide an input image path",
            meta=meta,
        )

    source = Path(input_path)
    source_str = str(source)

    if not source.exists():
        return _failed(
            source_path=source_str,
            code=ScanToPdfErrorCode.INPUT_NOT_FOUND,
            stage="read",
            message=f"Input file does not exist: {source_str}",
            meta=meta,
        )

    output_path = derive_output_path(
        source, suffix=config.output_suffix, extension=config.output_extension
    )

    try:
        source_bytes = read_input_bytes(source)
    except OSError as e:
        return _failed(
            source_path=source_str,
            code=ScanToPdfErrorCode.DECODE_ERROR,
            stage="read",
            message=f"Unable to read input file: {e}",
            detail={"error": repr(e)},
            meta=meta,
        )
    logger.debug("read %d bytes from %s", len(source_bytes), source_str)

    meta["source_bytes"] = len(source_bytes)
    if config.compute_source_sha256:
        meta["source_sha256"] = sha256_bytes(source_bytes)

    stage = "decode"
    try:
        buffer = decode_raster(source_bytes)
        logger.debug("decoded %dx%d, %d channels", buffer.width, buffer.height, buffer.channels)

        stage = "tone_map"
        stats = apply_tone_map(buffer)
        logger.debug(
            "tone map: %d highlight, %d contrast pixels", stats.highlight_pixels, stats.contrast_pixels
        )

        stage = "encode"
        raster = encode_raster(buffer, quality=config.jpeg_quality)
        logger.debug("encoded JPEG, %d bytes", len(raster.data))

        stage = "assemble"
        pdf = assemble_image_pdf(raster, engine=config.engine)
        logger.debug("assembled PDF, %d bytes", len(pdf.data))
    except RasterStageError as e:
        return _failed(
            source_path=source_str,
            code=_code_for(e),
            stage=stage,
            message=str(e),
            detail={"error": repr(e)},
            meta=meta,
        )

    try:
        write_bytes_atomic(output_path, pdf.data)
    except OSError as e:
        return _failed(
            source_path=source_str,
            code=ScanToPdfErrorCode.WRITE_ERROR,
            stage="write",
            message=f"Unable to write {output_path}: {e}",
            detail={"output_path": str(output_path), "error": repr(e)},
            meta=meta,
        )

    meta.update(
        {
            "tone_map": stats.to_dict(),
            "jpeg_bytes": len(raster.data),
            "pdf_bytes": len(pdf.data),
            **pdf.backend,
        }
    )
    logger.info("wrote %s (%dx%d)", output_path, raster.width, raster.height)

    return ScanToPdfResult(
        ok=True,
        source_path=source_str,
        output_path=str(output_path),
        page={"width_px": raster.width, "height_px": raster.height},
        errors=[],
        meta=meta,
    )
