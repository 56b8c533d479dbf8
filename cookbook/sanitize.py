# Shallow input bounding. HTML escaping happens at render time, not here.

RECIPE_FIELD_MAX = 10000
COMMENT_FIELD_MAX = 1000


def sanitize(value, max_length: int = RECIPE_FIELD_MAX) -> str:
    """Trim, drop every ``<`` and ``>`` and cut to ``max_length``.

    Anything that is not a string (including None) becomes "". The result
    never starts or ends with whitespace, so sanitizing twice is a no-op.
    """
    if not isinstance(value, str):
        return ""
    cleaned = value.replace("<", "").replace(">", "").strip()
    return cleaned[:max_length].rstrip()
