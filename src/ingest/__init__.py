"""Track ingestion pipeline.

This package splits HURDAT2 sources into chunks, parses them in
parallel, and merges the fragments back into storm records.
"""
