"""
Command-line interface for wbload.
"""
