"""Free-text sanitizer applied before anything is stored."""

import html

import nh3

# Each pass either strips markup or decodes one level of entities.
_MAX_PASSES = 4


def _strip(value: str) -> str:
    # script/style are dropped with their contents (nh3 default clean_content_tags)
    return nh3.clean(value, tags=set(), attributes={})


def clean(text: str | None) -> str:
    """Return ``text`` as plain text with every tag removed.

    Entity-encoded markup such as ``&lt;script&gt;`` is decoded and cleaned
    again, so the result never carries a tag in either form.
    """
    if text is None:
        return ""
    value = str(text)
    for _ in range(_MAX_PASSES):
        decoded = html.unescape(_strip(value))
        if decoded == value:
            return value.strip()
        value = decoded
    return _strip(value).strip()
