import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Comma separated list of origins allowed for HTTP and Socket.IO
    CORS_ORIGINS = [o.strip() for o in os.environ.get(
        'CORS_ORIGINS', 'http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173'
    ).split(',') if o.strip()]
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', '3001'))
    DEBUG = os.environ.get('DEBUG', '0') == '1'
    # Board geometry (pixels)
    BOARD_WIDTH = float(os.environ.get('BOARD_WIDTH', '800'))
    BOARD_HEIGHT = float(os.environ.get('BOARD_HEIGHT', '600'))
    PADDLE_WIDTH = float(os.environ.get('PADDLE_WIDTH', '10'))
    PADDLE_HEIGHT = float(os.environ.get('PADDLE_HEIGHT', '100'))
    PADDLE_OFFSET = float(os.environ.get('PADDLE_OFFSET', '20'))
    BALL_RADIUS = float(os.environ.get('BALL_RADIUS', '8'))
    # Movement (pixels per intent / per tick)
    PADDLE_SPEED = float(os.environ.get('PADDLE_SPEED', '12'))
    SERVE_SPEED = float(os.environ.get('SERVE_SPEED', '5'))
    SERVE_VY_MAX = float(os.environ.get('SERVE_VY_MAX', '3'))
    SPIN_FACTOR = float(os.environ.get('SPIN_FACTOR', '10'))
    # Collision margins
    WALL_MARGIN = float(os.environ.get('WALL_MARGIN', '8'))
    PADDLE_MARGIN = float(os.environ.get('PADDLE_MARGIN', '8'))
    SCORE_MARGIN = float(os.environ.get('SCORE_MARGIN', '20'))
    # Match rules
    WINNING_SCORE = int(os.environ.get('WINNING_SCORE', '11'))
    # Loop rates (Hz) and the point pause (seconds)
    TICK_RATE = int(os.environ.get('TICK_RATE', '60'))
    IDLE_BROADCAST_RATE = int(os.environ.get('IDLE_BROADCAST_RATE', '30'))
    RESPAWN_DELAY_SEC = float(os.environ.get('RESPAWN_DELAY_SEC', '1.0'))
    # Run the broadcast loop even when TESTING is set
    ENABLE_SCHEDULER_IN_TESTS = False
