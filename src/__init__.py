"""
NetPerfCompare - Internet Performance Comparison

This package derives grouped, chart-ready aggregates comparing speed and
latency measurements across locations, client ISPs and transit ISPs.
"""

__version__ = "26.10.16"
