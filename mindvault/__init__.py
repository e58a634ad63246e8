"""MindVault: local-first knowledge bookmarking with AI summaries."""
