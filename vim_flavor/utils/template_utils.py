"""Template processing utilities"""

import string
from typing import Any, Dict, Iterable


def render_template(template: str,
                    variables: Dict[str, Any],
                    safe: bool = False) -> str:
    """
    Render template with variables

    Args:
        template: Template string using $name placeholders
        variables: Variables to substitute
        safe: Use safe substitution (ignore missing vars)

    Returns:
        Rendered string
    """
    tmpl = string.Template(template)

    if safe:
        return tmpl.safe_substitute(variables)
    else:
        return tmpl.substitute(variables)


def vim_string_list(values: Iterable[str]) -> str:
    """
    Format values as the items of a Vim script list literal

    Args:
        values: Strings to quote

    Returns:
        Comma separated single-quoted strings
    """
    # Vim doubles a single quote inside a single-quoted string
    return ", ".join("'" + value.replace("'", "''") + "'" for value in values)
