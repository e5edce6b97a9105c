"""
Diagnostic message rendering.

Templates live in formats.yaml and use numbered placeholders (#1, #2, ...).
Only substitution happens here; there is no translation layer.
"""

import re
from typing import Any

from xml_invoice_parser.config import get_formats_config


_PLACEHOLDER = re.compile(r'#(\d+)')


def format_template(template: str, *values: Any) -> str:
    """
    Substitute #1, #2, ... in template with positional values.

    Placeholders without a matching value are left untouched.

    Example:
        >>> format_template("#1 of #2", "one", "two")
        'one of two'
        >>> format_template("#1 and #3", "a")
        'a and #3'
    """
    def replace(match: re.Match) -> str:
        index = int(match.group(1)) - 1
        if 0 <= index < len(values):
            return str(values[index])
        return match.group(0)

    return _PLACEHOLDER.sub(replace, template)


def render_message(key: str, *values: Any) -> str:
    """
    Render the configured template key with values.

    Raises:
        KeyError: If key is not a configured template
    """
    template = get_formats_config().get_message_template(key)
    return format_template(template, *values)
