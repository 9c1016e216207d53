"""taskgram - daily notes from Notion task pages."""
