from __future__ import annotations

"""
Content-based format detection.

The leading bytes of a file decide how it is rendered:

  1. empty files are plain text;
  2. a known magic signature names a binary format;
  3. a UTF-8/16/32 byte-order mark means text in that encoding;
  4. NUL bytes, or too many control / undecodable bytes, mean arbitrary
     binary data;
  5. everything else is plain text.

The file extension is never consulted.
"""

import codecs
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Tuple

from path2md.constants import SNIFF_SIZE
from path2md.core.interfaces.detector import FormatDetectorProtocol
from path2md.core.models import ARBITRARY_BINARY, PLAIN_TEXT, RenderedFormat
from path2md.errors import FormatDetectionFailed
from path2md.logging.helpers import get_logger, trace_io

# Share of suspicious bytes above which a sample is considered binary.
BINARY_RATIO = 0.30

_TEXT_BYTES = frozenset({7, 8, 9, 10, 12, 13, 27} | set(range(32, 127)))


@dataclass(frozen=True)
class Signature:
    offset: int
    magic: bytes
    fmt: RenderedFormat
    check: Optional[Callable[[bytes], bool]] = None

    def matches(self, data: bytes) -> bool:
        end = self.offset + len(self.magic)
        if data[self.offset:end] != self.magic:
            return False
        return self.check(data) if self.check else True


def _fmt(name: str, media_type: str) -> RenderedFormat:
    return RenderedFormat(name, media_type)


def _has_nul_header(data: bytes) -> bool:
    return b'\x00' in data[:64]


def _riff_kind(kind: bytes) -> Callable[[bytes], bool]:
    return lambda data: data[8:12] == kind


SIGNATURES: Tuple[Signature, ...] = (
    Signature(0, b'\x89PNG\r\n\x1a\n', _fmt('Portable Network Graphics', 'image/png')),
    Signature(0, b'\xff\xd8\xff', _fmt('Joint Photographic Experts Group', 'image/jpeg')),
    Signature(0, b'GIF87a', _fmt('Graphics Interchange Format', 'image/gif')),
    Signature(0, b'GIF89a', _fmt('Graphics Interchange Format', 'image/gif')),
    Signature(0, b'%PDF-', _fmt('Portable Document Format', 'application/pdf')),
    Signature(0, b'PK\x03\x04', _fmt('ZIP', 'application/zip')),
    Signature(0, b'PK\x05\x06', _fmt('ZIP', 'application/zip')),
    Signature(0, b'\x1f\x8b', _fmt('Gzip', 'application/gzip')),
    Signature(0, b'BZh', _fmt('Bzip2', 'application/x-bzip2'),
              check=lambda d: len(d) > 3 and 0x31 <= d[3] <= 0x39 and d[4:10] in (b'1AY&SY', b'\x17rE8P\x90')),
    Signature(0, b'\xfd7zXZ\x00', _fmt('XZ', 'application/x-xz')),
    Signature(0, b"7z\xbc\xaf'\x1c", _fmt('7-Zip', 'application/x-7z-compressed')),
    Signature(0, b'\x28\xb5\x2f\xfd', _fmt('Zstandard', 'application/zstd')),
    Signature(0, b'Rar!\x1a\x07', _fmt('Roshal Archive', 'application/vnd.rar')),
    Signature(0, b'\x7fELF', _fmt('Executable and Linkable Format', 'application/x-executable')),
    Signature(0, b'MZ', _fmt('MS-DOS Executable', 'application/x-msdownload'), check=_has_nul_header),
    Signature(0, b'\xfe\xed\xfa\xce', _fmt('Mach-O', 'application/x-mach-binary')),
    Signature(0, b'\xfe\xed\xfa\xcf', _fmt('Mach-O', 'application/x-mach-binary')),
    Signature(0, b'\xce\xfa\xed\xfe', _fmt('Mach-O', 'application/x-mach-binary')),
    Signature(0, b'\xcf\xfa\xed\xfe', _fmt('Mach-O', 'application/x-mach-binary')),
    Signature(0, b'\xca\xfe\xba\xbe', _fmt('Java Class', 'application/java-vm')),
    Signature(0, b'\x00asm', _fmt('WebAssembly Binary', 'application/wasm')),
    Signature(0, b'SQLite format 3\x00', _fmt('SQLite 3', 'application/vnd.sqlite3')),
    Signature(0, b'OggS\x00', _fmt('OGG', 'audio/ogg')),
    Signature(0, b'fLaC', _fmt('Free Lossless Audio Codec', 'audio/x-flac'), check=_has_nul_header),
    Signature(0, b'RIFF', _fmt('Waveform Audio', 'audio/vnd.wave'), check=_riff_kind(b'WAVE')),
    Signature(0, b'RIFF', _fmt('Audio Video Interleave', 'video/avi'), check=_riff_kind(b'AVI ')),
    Signature(0, b'RIFF', _fmt('WebP', 'image/webp'), check=_riff_kind(b'WEBP')),
    Signature(0, b'BM', _fmt('Windows Bitmap', 'image/bmp'), check=lambda d: d[6:10] == b'\x00\x00\x00\x00'),
    Signature(0, b'\x00\x00\x01\x00', _fmt('Windows Icon', 'image/x-icon')),
    Signature(0, b'II*\x00', _fmt('Tag Image File Format', 'image/tiff')),
    Signature(0, b'MM\x00*', _fmt('Tag Image File Format', 'image/tiff')),
    Signature(0, b'ID3', _fmt('MPEG-1/2 Audio Layer 3', 'audio/mpeg'),
              check=lambda d: len(d) > 4 and d[3] in (2, 3, 4) and d[4] != 0xFF),
    Signature(4, b'ftyp', _fmt('ISO Base Media File Format', 'video/mp4'), check=_has_nul_header),
)

# Longest marks first: the UTF-32 LE mark starts with the UTF-16 LE one.
_BOMS: Tuple[Tuple[bytes, str], ...] = (
    (codecs.BOM_UTF32_LE, 'utf-32'),
    (codecs.BOM_UTF32_BE, 'utf-32'),
    (codecs.BOM_UTF8, 'utf-8-sig'),
    (codecs.BOM_UTF16_LE, 'utf-16'),
    (codecs.BOM_UTF16_BE, 'utf-16'),
)


def _text_with_encoding(encoding: str) -> RenderedFormat:
    return RenderedFormat(PLAIN_TEXT.name, PLAIN_TEXT.media_type, is_text=True, encoding=encoding)


def _looks_binary(sample: bytes) -> bool:
    if b'\x00' in sample:
        return True

    try:
        # final=False tolerates a multi-byte sequence cut at the sample edge.
        decoded = codecs.getincrementaldecoder('utf-8')().decode(sample, final=False)
    except UnicodeDecodeError:
        suspicious = sum(b not in _TEXT_BYTES for b in sample)
        return suspicious / len(sample) > BINARY_RATIO

    controls = sum(1 for ch in decoded if ord(ch) < 128 and ord(ch) not in _TEXT_BYTES)
    return controls / max(len(decoded), 1) > BINARY_RATIO


def sniff_bytes(sample: bytes) -> RenderedFormat:
    """Classify the leading bytes of a file."""
    if not sample:
        return PLAIN_TEXT

    for sig in SIGNATURES:
        if sig.matches(sample):
            return sig.fmt

    for bom, encoding in _BOMS:
        if sample.startswith(bom):
            return _text_with_encoding(encoding)

    if _looks_binary(sample):
        return ARBITRARY_BINARY
    return PLAIN_TEXT


class FormatDetector(FormatDetectorProtocol):
    def __init__(self, *, sniff_size: int = SNIFF_SIZE, logger: Optional[logging.Logger] = None) -> None:
        self._sniff_size = int(sniff_size)
        self._log = logger or get_logger('detect')

    def detect(self, path: Path) -> RenderedFormat:
        try:
            with open(path, 'rb') as fh:
                sample = fh.read(self._sniff_size)
        except OSError as exc:
            raise FormatDetectionFailed(Path(path), exc.strerror) from exc

        fmt = sniff_bytes(sample)
        trace_io(self._log, 'format detected', path=str(path), format=fmt.name, sampled=len(sample))
        return fmt


def detect_format(path: Path) -> RenderedFormat:
    """Module-level shortcut around a default `FormatDetector`."""
    return FormatDetector().detect(path)
