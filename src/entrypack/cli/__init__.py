"""
Command-line interface entry points for entrypack.

Entry points:
- entrypack: Convert a JMdict dump into entities.json and entrypack.json
"""
