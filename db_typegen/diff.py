"""Line diffs between persisted and freshly generated output."""

import difflib
from typing import Optional


def diff(expected: str, actual: str, fromfile: str = "existing", tofile: str = "generated") -> Optional[str]:
    """Return a unified diff of two texts, or None when they are identical.

    The diff is for people only; match/mismatch is decided on the raw text.
    """
    if expected == actual:
        return None
    lines = difflib.unified_diff(
        expected.splitlines(keepends=True),
        actual.splitlines(keepends=True),
        fromfile=fromfile,
        tofile=tofile,
    )
    # A missing trailing newline would otherwise glue two lines together
    return "".join(line if line.endswith("\n") else line + "\n" for line in lines)
