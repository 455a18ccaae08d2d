"""
Service layer for trade imports, analytics aggregates and bot sync.
"""
