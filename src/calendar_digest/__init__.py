"""Calendar digest notifications.

Reads a calendar's events and posts a daily or weekly schedule summary to a
Discord-style chat webhook.
"""

__version__ = "0.1.0"
