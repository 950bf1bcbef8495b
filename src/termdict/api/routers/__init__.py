"""API routers package.

Each router module owns one slice of the HTTP surface and delegates to
``termdict.ops`` for anything beyond transport.
"""
