"""Embedding of TrueType font programs into the target document.

Fonts are looked up by file name in the configured fonts directory and
embedded whole as simple TrueType fonts with ``WinAnsiEncoding``. Widths for
codes 32-255 are measured by decoding each code through cp1252 and mapping the
character through the font's cmap.
"""

from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Sequence

from fontTools.ttLib import TTFont, TTLibError
from pypdf.generic import (
    ArrayObject,
    DecodedStreamObject,
    DictionaryObject,
    FloatObject,
    IndirectObject,
    NameObject,
    NumberObject,
)

from ..core.utils import get_logger
from .document import TargetDocument
from .exceptions import FontLoadError, FontNotFoundError

LOGGER = get_logger("pdfattach.pdfa.fonts")

FONT_ENCODING = "WinAnsiEncoding"
FIRST_CHAR = 32
LAST_CHAR = 255

FLAG_FIXED_PITCH = 1
FLAG_SERIF = 2
FLAG_NONSYMBOLIC = 32
FLAG_ITALIC = 64


def _scale(value: float, units_per_em: int) -> int:
    return int(round(value * 1000.0 / units_per_em))


def _base_font_name(tt_font: TTFont, fallback: str) -> str:
    name = None
    if "name" in tt_font:
        name = tt_font["name"].getDebugName(6) or tt_font["name"].getDebugName(4)
    name = name or fallback
    return "".join(ch for ch in name if ch.isalnum() or ch in "-_") or "Font"


def _widths(tt_font: TTFont, units_per_em: int) -> list[int]:
    cmap = tt_font.getBestCmap() or {}
    metrics = tt_font["hmtx"].metrics
    missing = metrics.get(".notdef", (0, 0))[0]
    widths = []
    for code in range(FIRST_CHAR, LAST_CHAR + 1):
        try:
            char = bytes([code]).decode("cp1252")
        except UnicodeDecodeError:
            widths.append(_scale(missing, units_per_em))
            continue
        glyph = cmap.get(ord(char))
        advance = metrics[glyph][0] if glyph in metrics else missing
        widths.append(_scale(advance, units_per_em))
    return widths


def _descriptor_metrics(tt_font: TTFont) -> dict[str, object]:
    head = tt_font["head"]
    units_per_em = head.unitsPerEm
    hhea = tt_font["hhea"]
    os2 = tt_font["OS/2"] if "OS/2" in tt_font else None
    post = tt_font["post"] if "post" in tt_font else None

    ascent = hhea.ascent
    descent = hhea.descent
    cap_height = ascent
    if os2 is not None:
        ascent = getattr(os2, "sTypoAscender", ascent) or ascent
        descent = getattr(os2, "sTypoDescender", descent) or descent
        cap_height = getattr(os2, "sCapHeight", 0) or ascent
    italic_angle = float(post.italicAngle) if post is not None else 0.0

    flags = FLAG_NONSYMBOLIC
    if post is not None and post.isFixedPitch:
        flags |= FLAG_FIXED_PITCH
    if italic_angle != 0.0 or head.macStyle & 0x2:
        flags |= FLAG_ITALIC
    weight = getattr(os2, "usWeightClass", 400) if os2 is not None else 400

    return {
        "units_per_em": units_per_em,
        "bbox": [
            _scale(head.xMin, units_per_em),
            _scale(head.yMin, units_per_em),
            _scale(head.xMax, units_per_em),
            _scale(head.yMax, units_per_em),
        ],
        "ascent": _scale(ascent, units_per_em),
        "descent": _scale(descent, units_per_em),
        "cap_height": _scale(cap_height, units_per_em),
        "italic_angle": italic_angle,
        "flags": flags,
        "stem_v": 50 + int((weight / 65.0) ** 2),
    }


def resolve_font_path(font_name: str, fonts_dir: Path) -> Path:
    """Return the path of *font_name* inside *fonts_dir*.

    Raises:
        FontNotFoundError: If no such file exists, or *font_name* points
            outside *fonts_dir*.
    """

    base_dir = Path(fonts_dir).resolve()
    font_path = (base_dir / font_name).resolve()
    if base_dir not in font_path.parents:
        raise FontNotFoundError(f"Font {font_name!r} is outside the fonts directory {base_dir}")
    if not font_path.is_file():
        raise FontNotFoundError(f"Font file not found: {font_path}")
    return font_path


def load_font(target: TargetDocument, font_path: Path) -> tuple[str, IndirectObject]:
    """Build the font objects for *font_path* inside *target*.

    Returns the PostScript base name and a reference to the font dictionary.
    """

    try:
        data = font_path.read_bytes()
        tt_font = TTFont(BytesIO(data), lazy=False)
    except (OSError, TTLibError, AssertionError, ValueError) as exc:
        raise FontLoadError(f"Unable to load font {font_path}: {exc}") from exc

    try:
        if "glyf" not in tt_font:
            raise FontLoadError(f"Only TrueType outlines can be embedded: {font_path}")
        metrics = _descriptor_metrics(tt_font)
        widths = _widths(tt_font, metrics["units_per_em"])
        base_font = _base_font_name(tt_font, font_path.stem)
    except FontLoadError:
        raise
    except Exception as exc:
        raise FontLoadError(f"Unable to read metrics from {font_path}: {exc}") from exc
    finally:
        tt_font.close()

    font_file = DecodedStreamObject()
    font_file.set_data(data)
    font_file[NameObject("/Length1")] = NumberObject(len(data))
    font_file = font_file.flate_encode()

    descriptor = DictionaryObject(
        {
            NameObject("/Type"): NameObject("/FontDescriptor"),
            NameObject("/FontName"): NameObject(f"/{base_font}"),
            NameObject("/Flags"): NumberObject(metrics["flags"]),
            NameObject("/FontBBox"): ArrayObject(NumberObject(v) for v in metrics["bbox"]),
            NameObject("/ItalicAngle"): FloatObject(metrics["italic_angle"]),
            NameObject("/Ascent"): NumberObject(metrics["ascent"]),
            NameObject("/Descent"): NumberObject(metrics["descent"]),
            NameObject("/CapHeight"): NumberObject(metrics["cap_height"]),
            NameObject("/StemV"): NumberObject(metrics["stem_v"]),
            NameObject("/FontFile2"): target.add_object(font_file),
        }
    )
    font = DictionaryObject(
        {
            NameObject("/Type"): NameObject("/Font"),
            NameObject("/Subtype"): NameObject("/TrueType"),
            NameObject("/BaseFont"): NameObject(f"/{base_font}"),
            NameObject("/FirstChar"): NumberObject(FIRST_CHAR),
            NameObject("/LastChar"): NumberObject(LAST_CHAR),
            NameObject("/Widths"): ArrayObject(NumberObject(w) for w in widths),
            NameObject("/Encoding"): NameObject(f"/{FONT_ENCODING}"),
            NameObject("/FontDescriptor"): target.add_object(descriptor),
        }
    )
    return base_font, target.add_object(font)


def embed_fonts(
    target: TargetDocument,
    font_names: Sequence[str] | None,
    fonts_dir: Path,
) -> list[str]:
    """Embed each font in *font_names* into *target* and return their base names.

    ``None`` and an empty sequence are both a no-op. Empty entries are skipped.
    The first font that cannot be found or loaded aborts the whole call.
    """

    if not font_names:
        return []

    LOGGER.info("Embedding fonts...")
    embedded: list[str] = []
    for font_name in font_names:
        if not font_name:
            continue
        LOGGER.info("Embedding %s font...", font_name)
        font_path = resolve_font_path(font_name, fonts_dir)
        base_font, font_ref = load_font(target, font_path)
        target.register_font(f"/PdfAF{len(target.fonts) + 1}", font_ref)
        embedded.append(base_font)
    return embedded


__all__ = [
    "FONT_ENCODING",
    "FIRST_CHAR",
    "LAST_CHAR",
    "resolve_font_path",
    "load_font",
    "embed_fonts",
]
