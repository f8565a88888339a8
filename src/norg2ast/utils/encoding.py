#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/norg2ast/utils/encoding.py
"""Character encoding detection for norg sources.

Norg files are expected to be UTF-8, but files written by other editors are
occasionally saved in a legacy code page. The helpers here decode raw bytes
with UTF-8 first and fall back to chardet-based detection.
"""

from __future__ import annotations

import logging

import chardet

logger = logging.getLogger(__name__)


def detect_encoding(
    data: bytes,
    sample_size: int = 8192,
    confidence_threshold: float = 0.7,
) -> str | None:
    """Detect character encoding of binary data using chardet.

    Parameters
    ----------
    data : bytes
        Binary data to analyze
    sample_size : int, default 8192
        Number of bytes to sample for detection (uses first N bytes)
    confidence_threshold : float, default 0.7
        Minimum confidence level (0.0-1.0) required to trust detection

    Returns
    -------
    str | None
        Detected encoding name, or None if detection fails or the
        confidence is below the threshold

    """
    sample = data[:sample_size]
    result = chardet.detect(sample)

    if not result or not result.get("encoding"):
        logger.debug("chardet: No encoding detected")
        return None

    encoding = result["encoding"]
    confidence = result.get("confidence") or 0.0
    logger.debug(f"chardet detected encoding: {encoding} (confidence: {confidence:.2f})")

    if confidence >= confidence_threshold:
        return encoding

    logger.debug(f"chardet confidence {confidence:.2f} below threshold {confidence_threshold}")
    return None


def decode_source(
    data: bytes,
    fallback_encodings: list[str] | None = None,
    use_chardet: bool = True,
) -> str:
    """Decode norg source bytes into text.

    Attempts, in order: UTF-8 (a leading byte order mark is dropped), chardet
    detection (if enabled), the fallback encodings, and finally UTF-8 with
    replacement characters.

    Parameters
    ----------
    data : bytes
        Binary data to decode
    fallback_encodings : list[str] | None, default None
        Encodings tried after detection. Defaults to ``['latin-1']``
    use_chardet : bool, default True
        Whether to attempt chardet-based detection

    Returns
    -------
    str
        Decoded text content

    """
    if fallback_encodings is None:
        fallback_encodings = ["latin-1"]

    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        logger.debug(f"Source is not valid UTF-8: {e}")

    if use_chardet:
        detected_encoding = detect_encoding(data)
        if detected_encoding:
            try:
                text = data.decode(detected_encoding)
            except (UnicodeDecodeError, LookupError) as e:
                logger.debug(f"Failed to decode with chardet-detected encoding {detected_encoding}: {e}")
            else:
                logger.debug(f"Successfully decoded with chardet-detected encoding: {detected_encoding}")
                return text

    for encoding in fallback_encodings:
        try:
            text = data.decode(encoding)
        except (UnicodeDecodeError, LookupError) as e:
            logger.debug(f"Failed to decode with {encoding}: {e}")
            continue
        logger.debug(f"Successfully decoded with encoding: {encoding}")
        return text

    logger.warning("All encoding attempts failed, using utf-8 with error replacement")
    return data.decode("utf-8", errors="replace")
