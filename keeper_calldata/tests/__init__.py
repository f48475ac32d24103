"""
keeper-calldata tests

Run with:
   pytest keeper_calldata/tests/ -v
"""
