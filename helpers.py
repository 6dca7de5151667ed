import re
import unicodedata
from pathlib import Path

# ---------------------------
# Text helpers for PDF output / filenames
# ---------------------------

_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")

# Typographic characters the core PDF fonts (Latin-1) cannot encode
SMART_MAP = {
    0x2018: "'", 0x2019: "'",  # ‘ ’
    0x201C: '"', 0x201D: '"',  # “ ”
    0x2013: "-", 0x2014: "-",  # – —
    0x2026: "...",
    0x00A0: " ",
}
TRANS_TABLE = str.maketrans(SMART_MAP)


def sanitize_filename_segment(text: str | None) -> str:
    """
    Keep ASCII letters and digits only.
    "A. Smith & Co." -> "ASmithCo"
    """
    return _NON_ALNUM.sub("", text or "")


def latin1_text(text) -> str:
    """
    Best-effort Latin-1 rendition for Helvetica: normalize, map smart punctuation,
    drop whatever is still unencodable. None renders as "".
    """
    if text is None:
        return ""
    if not isinstance(text, str):
        text = str(text)
    text = unicodedata.normalize("NFKC", text).translate(TRANS_TABLE)
    return text.encode("latin-1", "ignore").decode("latin-1")


def ensure_dir(path: str | Path) -> Path:
    p = Path(path)
    p.mkdir(parents=True, exist_ok=True)
    return p
