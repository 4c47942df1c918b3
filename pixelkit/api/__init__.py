"""
HTTP API for pixelkit.
"""
