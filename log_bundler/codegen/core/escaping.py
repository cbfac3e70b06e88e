"""
Template escaping for embedding message text in generated string literals.
"""

_NEWLINE = "\n"
_QUOTE = '"'


def escape_template(text: str) -> str:
    """Escape newlines, then double quotes, for use inside a "..." literal."""
    return text.replace(_NEWLINE, "\\n").replace(_QUOTE, '\\"')


def unescape_literal(text: str) -> str:
    """
    Reverse escape_template.

    Scans left to right so an escaped quote directly after an escaped
    newline is not misread.
    """
    out = []
    i = 0
    while i < len(text):
        char = text[i]
        if char == "\\" and i + 1 < len(text) and text[i + 1] in ("n", _QUOTE):
            out.append(_NEWLINE if text[i + 1] == "n" else _QUOTE)
            i += 2
            continue
        out.append(char)
        i += 1
    return "".join(out)


def format_literal(project_code: str, message_id: int, template: str) -> str:
    """Build the escaped ``<projectCode><id> <template>`` message literal."""
    return escape_template(f"{project_code}{message_id} {template}")
