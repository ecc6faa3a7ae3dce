"""Example streams and traces for demoreel.

This package demonstrates library usage but is not part of the core API.
"""
