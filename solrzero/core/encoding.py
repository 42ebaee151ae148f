"""
Percent-encoding of URL parameter values and query-string assembly.

ASCII letters, digits and "-" are left as-is; every other character is
replaced by its UTF-8 bytes, each written as %XX with uppercase hex digits.
"""
from typing import Any, Iterable, Mapping, Tuple, Union

from solrzero.core.exceptions import ValidationError


def _is_safe(ch: str) -> bool:
    code_point = ord(ch)
    return (
        48 <= code_point <= 57
        or 65 <= code_point <= 90
        or 97 <= code_point <= 122
        or ch == "-"
    )


def url_encode(text: str) -> str:
    """
    Percent-encode every unsafe character of a URL parameter value.

    >>> url_encode("date: [2020-05-26 TO *]")
    'date%3A%20%5B2020-05-26%20TO%20%2A%5D'

    Raises:
        ValidationError: If the text holds a lone surrogate, which has no
            UTF-8 form.
    """
    parts = []
    for ch in text:
        if _is_safe(ch):
            parts.append(ch)
            continue
        try:
            encoded = ch.encode("utf-8")
        except UnicodeEncodeError as e:
            raise ValidationError(
                f"Cannot percent-encode lone surrogate U+{ord(ch):04X}."
            ) from e
        parts.append("".join(f"%{byte:02X}" for byte in encoded))
    return "".join(parts)

def encode_value(value: Any) -> str:
    """
    Render a parameter value for the query string.

    Booleans and numbers are written as their literal text, everything else
    is stringified and percent-encoded.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return url_encode(str(value))


def join_params(
    params: Union[Mapping[str, str], Iterable[Tuple[str, str]]]
) -> str:
    """Join already-encoded parameters as k1=v1&k2=v2, in iteration order."""
    items = params.items() if isinstance(params, Mapping) else params
    return "&".join(f"{key}={value}" for key, value in items)


def build_path(base: str, params) -> str:
    query_string = join_params(params)
    if not query_string:
        return base
    return f"{base}?{query_string}"
