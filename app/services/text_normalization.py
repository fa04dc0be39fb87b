import unicodedata


def normalize_text(text: str) -> str:
    """
    Fold compatibility characters to their standard form (NFKC):
    full-width letters and digits become half-width, compatibility
    ideographs become their unified counterparts.
    """
    return unicodedata.normalize("NFKC", text)
