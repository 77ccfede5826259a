from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config

socketio = SocketIO(async_mode=None)


def _allowed_origins(raw):
    if not raw or raw.strip() == '*':
        return '*'
    return [origin.strip() for origin in raw.split(',') if origin.strip()]


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    allowed_origins = _allowed_origins(flask_app.config.get('CORS_ORIGINS', '*'))
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(
        flask_app,
        cors_allowed_origins=allowed_origins,
        ping_timeout=flask_app.config.get('PING_TIMEOUT', 60),
        ping_interval=flask_app.config.get('PING_INTERVAL', 25),
    )

    from flapduel.services.matchmaking import Coordinator, RelayRouter, SocketIOChannel
    namespace = flask_app.config.get('SOCKETIO_NAMESPACE', '/')
    coordinator = Coordinator(
        channel=SocketIOChannel(socketio, namespace=namespace),
        grace_sec=float(flask_app.config.get('CLEANUP_GRACE_SEC', 5)),
        seed_max=int(flask_app.config.get('SEED_MAX', 1000000)),
    )
    flask_app.extensions['flapduel'] = coordinator

    from flapduel.main import main
    flask_app.register_blueprint(main)

    # Register Socket.IO event handlers against this app's coordinator
    from flapduel.socketio_events import register_socketio_handlers
    register_socketio_handlers(RelayRouter(coordinator), namespace=namespace)

    return flask_app
