"""Replacement engine.

Literal patterns go through bounded left-to-right substitution. Matcher
patterns are applied from the last match to the first so that the spans of
earlier matches keep their original offsets.
"""
