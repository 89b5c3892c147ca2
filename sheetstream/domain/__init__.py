"""Domain layer for sheetstream.

Typed cell values and the pure value-mapping rules. Independent of streams
and files.
"""
