"""
Test suite for ta_stream

Contains:
- tests/unit/     : Unit tests for numeric primitives, DataItem, indicators
                    and the State Snapshot contract
- tests/helpers.py: Shared feeding / rounding helpers
"""
