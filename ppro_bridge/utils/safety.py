"""
Static policy for scripts sent to the host.

The pattern list is a deterrent against obvious code injection through tool
parameters. It is trivially defeated by obfuscation and is not a sandbox;
ExtendScript offers no capability-restricted context to fall back on.
"""

import re
from typing import List, Pattern

from ppro_bridge.bridge.exceptions import ScriptValidationError

MAX_SCRIPT_SIZE = 500 * 1024  # bytes, UTF-8 encoded

BLOCKED_PATTERNS: List[Pattern[str]] = [
    re.compile(r"\beval\s*\("),
    re.compile(r"\bnew\s+Function\s*\("),
    re.compile(r"\bSystem\s*\.\s*callSystem\s*\("),
]


def validate_script(script: str, allow_unsafe: bool = False) -> None:
    """
    Raise ScriptValidationError if the script may not be dispatched.

    The size ceiling applies on every path. Blocked patterns are skipped when
    ``allow_unsafe`` is set, which only the raw scripting tool does.
    """
    if len(script.encode("utf-8")) > MAX_SCRIPT_SIZE:
        raise ScriptValidationError(
            f"Script exceeds {MAX_SCRIPT_SIZE // 1024}KB size limit", reason="size"
        )

    if allow_unsafe:
        return

    for pattern in BLOCKED_PATTERNS:
        if pattern.search(script):
            raise ScriptValidationError(
                f"Script contains blocked pattern: {pattern.pattern}", reason="pattern"
            )
