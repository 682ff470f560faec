"""
HTTP adapters: routers and middleware.
"""
