"""
Bearer token authentication.
"""
