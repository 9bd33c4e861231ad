import os


def _csv(value):
    return [item.strip() for item in value.split(',') if item.strip()]


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', '3000'))
    CORS_ORIGINS = _csv(os.environ.get(
        'CORS_ORIGINS',
        'http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173,http://127.0.0.1:5173',
    ))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    # Room every connection lands in unless it asks for ?room=<name>
    DEFAULT_ROOM = os.environ.get('DEFAULT_ROOM', 'main')
    # Physics cadence (ticks per second)
    TICK_HZ = int(os.environ.get('TICK_HZ', '60'))
    WIN_SCORE = int(os.environ.get('WIN_SCORE', '10'))
    BALL_SERVE_SPEED = float(os.environ.get('BALL_SERVE_SPEED', '360'))
    # Start as soon as both sides are seated; when off, the room waits for a serve
    AUTO_START_MATCH = os.environ.get('AUTO_START_MATCH', '1') not in ('0', 'false', 'no')
    # Optional: heartbeat interval for ticker logs (sec). 0 disables.
    TICK_HEARTBEAT_SEC = int(os.environ.get('TICK_HEARTBEAT_SEC', '0'))
    # Optional: fixed seed for serve jitter, handy for reproducing a rally
    RANDOM_SEED = os.environ.get('RANDOM_SEED')
