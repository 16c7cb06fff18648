"""
Web interface for the match engine.
"""
