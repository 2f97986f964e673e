"""
Textual helpers applied to raw markup before it reaches the parser.
"""

import re

HTML_END_TAG = "</html"

# Complete <script>...</script> blocks
_SCRIPT_BLOCK_RE = re.compile(r'<script\b[^>]*>.*?</script\s*>', re.IGNORECASE | re.DOTALL)

# A <script> start tag left over once complete blocks are gone
_DANGLING_SCRIPT_RE = re.compile(r'<script\b[^>]*>', re.IGNORECASE)


def truncate_after_html_end(html_content: str) -> str:
    """
    Drop everything after the last ``</html...>`` end tag.

    Some pages append scripts or markup after the closing root tag. The
    search is case-sensitive and purely textual.
    """
    index_of_html_end = html_content.rfind(HTML_END_TAG)
    if index_of_html_end == -1:
        return html_content

    index_of_bracket = html_content.find('>', index_of_html_end)
    if index_of_bracket == -1:
        return html_content

    return html_content[:index_of_bracket + 1]


def remove_script_tags(html_content: str) -> str:
    """
    Strip script blocks from markup.

    Complete blocks are removed with their content. A start tag that is
    never closed is removed on its own, so the markup after it survives.
    """
    html_content = _SCRIPT_BLOCK_RE.sub('', html_content)
    return _DANGLING_SCRIPT_RE.sub('', html_content)
