"""
HTML parser backends producing readability_dom trees.
"""

from .html_parser import (
    HTMLParser,
    Html5libParser,
    SoupParser,
    create_parser,
    is_end_of_file_error_code,
    is_unterminated_content_error,
)

__all__ = [
    'HTMLParser', 'Html5libParser', 'SoupParser', 'create_parser',
    'is_end_of_file_error_code', 'is_unterminated_content_error'
]
