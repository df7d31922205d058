"""
Break Timer - Work/Break Interval Timer

Tracks a work session against a configurable work duration and signals
once when it is time for a break. Session state is derived from persisted
wall-clock timestamps so it survives restarts.
"""

__version__ = "0.1.0"
__author__ = "Break Timer Team"
