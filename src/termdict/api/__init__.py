"""
HTTP layer for termdict.

Provides a FastAPI application factory whose routes delegate to the
operations layer (``termdict.ops``). Everything here is transport:
query/path decoding, serialisation, error mapping and static assets.

Quick start::

    from termdict.api import create_app

    app = create_app()  # ready for uvicorn

Tags:
    termdict, api, REST, FastAPI, transport-layer
"""

from termdict.api.app import create_app

__all__ = ["create_app"]
