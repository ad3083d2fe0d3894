"""
NetPerfCompare - Utilities Package

Configuration, logging, timing and color helpers.
"""
