"""
Asset Host

A small HTTP file server for user-uploaded worlds and avatars, each stored
as a binary file beside a JSON metadata sidecar.
"""

__version__ = "1.0.0"
