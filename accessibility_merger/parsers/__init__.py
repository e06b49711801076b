"""
Parsers turning raw scanner output into the merger's source records.
"""

from .axe_parser import generate_fix_suggestions, parse_violations, summarize_axe_results
from .keyboard_parser import collect_keyboard_findings
from .lighthouse_parser import process_lighthouse_report
from .pa11y_parser import format_pa11y_results

__all__ = [
    'collect_keyboard_findings',
    'format_pa11y_results',
    'generate_fix_suggestions',
    'parse_violations',
    'process_lighthouse_report',
    'summarize_axe_results',
]
