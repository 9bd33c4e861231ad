from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config

socketio = SocketIO(async_mode=None)


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = flask_app.config.get('CORS_ORIGINS') or []
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # Live match state, reachable from handlers through current_app
    from pong_server.services.pong import REGISTRY_KEY, TICKER_KEY
    from pong_server.services.pong.registry import make_registry
    from pong_server.services.pong.ticker import Ticker
    registry = make_registry(flask_app.config)
    flask_app.extensions[REGISTRY_KEY] = registry
    flask_app.extensions[TICKER_KEY] = Ticker(
        flask_app, registry, tick_hz=int(flask_app.config.get('TICK_HZ', 60))
    )

    # Import and register blueprints here
    from pong_server.main import main
    flask_app.register_blueprint(main)

    from pong_server.api.rooms import rooms
    flask_app.register_blueprint(rooms, url_prefix='/api/rooms')

    # Register Socket.IO event handlers
    from pong_server.socketio_events import register_socketio_handlers
    register_socketio_handlers()

    # The physics loop is driven by hand in tests
    if not flask_app.config.get('TESTING'):
        flask_app.extensions[TICKER_KEY].start()

    return flask_app
