"""
Loading, canonical ordering and lookup over a parsed package index.
"""
