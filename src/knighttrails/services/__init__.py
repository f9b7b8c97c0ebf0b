"""Services for session management and pattern narration."""
