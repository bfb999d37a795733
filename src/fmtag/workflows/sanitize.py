"""Body cleanup before handing a note to the generation service.

Images (especially inline data URIs) and code blocks add little to a
summary and can be very large, so they are removed or collapsed and the
result is capped in length.
"""

import re

TRUNCATION_NOTICE = "\n\n[... truncated for LLM ...]"
CODE_PLACEHOLDER = "[code omitted]"

_DATA_URI_MARKDOWN_IMAGE = re.compile(r"!\[[^\]]*]\(\s*data:image/[^)]+\)", re.IGNORECASE)
_DATA_URI_HTML_IMAGE = re.compile(
    r"<img[^>]+src\s*=\s*[\"']data:image/[^\"']+[\"'][^>]*>", re.IGNORECASE
)
_MARKDOWN_IMAGE = re.compile(r"!\[[^\]]*]\(\s*[^)]+\)")
_EMBED = re.compile(r"!\[\[[^\]]+]]")
_HTML_IMAGE = re.compile(r"<img[^>]*>", re.IGNORECASE)
_FENCED_CODE = re.compile(r"```.*?```", re.DOTALL)


def sanitize_body(body: str, max_chars: int = 40000, collapse_code: bool = True) -> str:
    """Strip images, collapse code and cap the body length.

    Args:
        body: Note body.
        max_chars: Maximum characters kept before the truncation notice.
        collapse_code: Replace fenced code blocks with a placeholder.

    Returns:
        Body text suitable for a generation prompt.
    """
    text = _DATA_URI_MARKDOWN_IMAGE.sub("", body)
    text = _DATA_URI_HTML_IMAGE.sub("", text)

    text = _MARKDOWN_IMAGE.sub("", text)
    text = _EMBED.sub("", text)
    text = _HTML_IMAGE.sub("", text)

    if collapse_code:
        text = _FENCED_CODE.sub(CODE_PLACEHOLDER, text)

    if len(text) > max_chars:
        text = text[:max_chars] + TRUNCATION_NOTICE
    return text
