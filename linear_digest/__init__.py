"""
Linear Weekly Digest

Fetches Linear issues, aggregates them into a weekly summary and delivers it
to a Discord webhook and/or email.
"""

__version__ = "0.1.0"
