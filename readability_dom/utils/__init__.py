"""
Utility modules for readability_dom.
"""

from readability_dom.utils.config import Config
from readability_dom.utils.iterables import single_or_none, single_element_or_none
from readability_dom.utils.html_utils import truncate_after_html_end, remove_script_tags
from readability_dom.utils.logging import setup_logging, log_exception, PerformanceLogger

__all__ = [
    'Config',
    'single_or_none',
    'single_element_or_none',
    'truncate_after_html_end',
    'remove_script_tags',
    'setup_logging',
    'log_exception',
    'PerformanceLogger',
]
