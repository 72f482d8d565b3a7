"""
Terminal Budget - Source Package

An interactive terminal application for tracking wallets grouped into
budget files, with ad-hoc currency conversion for totals.

DESIGN PRINCIPLES:
1. One key event is fully handled before the next one is read
2. Destructive actions always pass through a confirmation gate
3. Every failure becomes a message, never a crash
4. Storage and rate sources are swappable
"""

__version__ = "1.0.0"
__author__ = "Terminal Budget Team"
