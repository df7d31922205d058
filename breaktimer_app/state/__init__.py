"""
Timer state machine module.

Derives STOPPED -> RUNNING -> OVERDUE from the session start timestamp and
the wall clock, and schedules the periodic tick.
"""
