"""Output layer for merged records.

This package renders merged storm records as HURDAT2 text or JSONL.
"""
