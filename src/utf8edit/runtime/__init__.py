"""Logging and configuration shared by the codec and the editing view."""
