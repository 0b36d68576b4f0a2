# =============================================================================
# core/sanitizer.py  -  Strip droid's terminal spinner preamble
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   On success, `droid exec` writes a little terminal animation before the
#   real answer: it hides the cursor, clears the spinner line, moves to
#   column 1, shows the cursor again, and prints a green "✓ <status>" line.
#
#     ESC[?25l ESC[2K ESC[1G ESC[?25h ESC[32m ✓ ...status... ESC[0m \n
#
#   None of that is useful to an MCP client, so we remove it.  The match is
#   all-or-nothing and anchored at offset 0: if any piece is missing or out
#   of order, the text comes back untouched.
# =============================================================================

import re

_SUCCESS_PREAMBLE = re.compile(
    r"\A"
    r"\x1b\[\?25l"      # hide cursor
    r"\x1b\[2K"         # clear line
    r"\x1b\[1G"         # cursor to column 1
    r"\x1b\[\?25h"      # show cursor
    r"\x1b\[32m✓"       # green checkmark
    r"[^\n]*"           # status text
    r"\x1b\[0m"         # reset
    r"\n"
)


def strip_success_preamble(text: str) -> str:
    """Remove the success preamble from the start of `text`, if present."""
    match = _SUCCESS_PREAMBLE.match(text)
    if match is None:
        return text
    return text[match.end():]
