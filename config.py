import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Hold time after game-over before the session is torn down (seconds)
    CLEANUP_GRACE_SEC = float(os.environ.get('CLEANUP_GRACE_SEC', '5'))
    # Upper bound (exclusive) of the shared procedural seed
    SEED_MAX = int(os.environ.get('SEED_MAX', '1000000'))
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/')
    # Comma separated list; '*' allows any origin
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*')
    # Socket.IO heartbeat (seconds)
    PING_TIMEOUT = int(os.environ.get('PING_TIMEOUT', '60'))
    PING_INTERVAL = int(os.environ.get('PING_INTERVAL', '25'))
    PORT = int(os.environ.get('PORT', '3000'))
