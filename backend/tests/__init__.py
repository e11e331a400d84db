"""
Backend test suite
"""
