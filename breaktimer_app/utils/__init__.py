"""
Utility functions module.

Time Semantics:
- Session timestamps are wall-clock epoch milliseconds
- Elapsed time is always derived as now - start, never accumulated
- Second granularity is sufficient for display and threshold checks
"""
