"""Format matchers.

Letter-bearing tokens are scanned first, then separated groups, then single digit runs
through the ordered compact rule registry.
"""

from .base import CompactRule, MatchContext
from .registry import COMPACT_RULES, match_compact
from .separated import analyze_separated
from .tokens import TimezoneMark, scan_letter_times, scan_month_names, scan_timezones
