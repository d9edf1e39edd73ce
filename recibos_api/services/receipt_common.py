import re
import unicodedata

# Portuguese month names, index = month number
MONTH_NAMES = (
    None,
    "janeiro", "fevereiro", "março", "abril", "maio", "junho",
    "julho", "agosto", "setembro", "outubro", "novembro", "dezembro",
)

_FILENAME_DROP = re.compile(r"[^a-zA-Z0-9\-_. ]")
_TOKEN_DROP = re.compile(r"[^a-zA-Z0-9]")


def strip_accents(text: str) -> str:
    """'Março' -> 'Marco'. Decomposes and drops combining marks."""
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def sanitize_filename(text: str) -> str:
    """
    Turn a person name into something safe for a file name:
    accents stripped, anything outside letters/digits/-/_/./space removed,
    trimmed, inner whitespace runs collapsed into a single underscore.
    """
    cleaned = _FILENAME_DROP.sub("", strip_accents(text or ""))
    return re.sub(r"\s+", "_", cleaned.strip())


def sanitize_token(text) -> str:
    """Every char outside [a-zA-Z0-9] becomes '-', lower-cased."""
    if text is None:
        return ""
    return _TOKEN_DROP.sub("-", str(text)).lower()
