"""Encoders turning events into text."""
