"""Voting domain services: name normalization, game registry, votes,
statistics and the user directory.

HTTP routes, socket handlers and CLI commands import from here, keeping
transport concerns separated from the vote bookkeeping.
"""
