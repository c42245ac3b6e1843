"""Codecs, errors and configuration shared by every event schema."""
