"""
Post Sync

Client for a remote post collection: create, list, fetch, update and delete
posts with optional image attachments, plus the screen controllers and the
notification store that sit on top of it.
"""

__version__ = "0.1.0"
