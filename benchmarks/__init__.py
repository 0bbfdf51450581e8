"""
Benchmark suite for jsonnav navigation performance.

Compares the codec backends jsonnav can run on:
- orjson (C-optimized, default)
- ujson (ultra-fast JSON)
- Python standard library json

Measures single lookups, nested descent and iteration.
"""
