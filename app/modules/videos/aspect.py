LANDSCAPE = "landscape"
PORTRAIT = "portrait"
OTHER = "other"

_LANDSCAPE_RATIO = round(16 / 9, 2)
_PORTRAIT_RATIO = round(9 / 16, 2)

def classify_orientation(width: int, height: int) -> str:
    """Bucket a frame size by its aspect ratio rounded to two decimals."""
    if width <= 0 or height <= 0:
        return OTHER
    ratio = round(width / height, 2)
    if ratio == _LANDSCAPE_RATIO:
        return LANDSCAPE
    if ratio == _PORTRAIT_RATIO:
        return PORTRAIT
    return OTHER
