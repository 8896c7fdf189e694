"""Routing — compiled mount table with O(path-depth) matching.

Mounts are registered during setup and compiled into an immutable
lookup structure when the router starts serving.
"""
