"""
HTML escaping for user-supplied text embedded in outbound email bodies.
"""

# Single-pass substitution table; str.translate never re-scans its own output,
# so "&" produced by an entity is not escaped a second time.
_HTML_ESCAPES = str.maketrans({
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#039;",
})


def sanitize_html(text: str) -> str:
    """
    Escape the five HTML-reserved characters in `text`.

    Not idempotent: escaping an already escaped string escapes its "&" again,
    so each piece of user input must be sanitized exactly once.
    """
    return text.translate(_HTML_ESCAPES)
