"""Pong match domain: room state, physics, wire protocol and the ticker.

Everything here except the ticker is free of Flask and Socket.IO so it can
be driven directly from tests; socket handlers and HTTP routes reach the
live objects through ``app.extensions``.
"""

REGISTRY_KEY = 'pong_rooms'
TICKER_KEY = 'pong_ticker'


def get_registry(app):
    return app.extensions[REGISTRY_KEY]


def get_ticker(app):
    return app.extensions[TICKER_KEY]
