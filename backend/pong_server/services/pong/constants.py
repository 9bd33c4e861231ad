import math

# Logical playfield, shared with the browser client
CANVAS_W = 900
CANVAS_H = 520

PADDLE_HEIGHT = 110
PADDLE_WIDTH = 14
PADDLE_INSET = 30
PADDLE_MARGIN = 6
PADDLE_MIN_Y = PADDLE_MARGIN
PADDLE_MAX_Y = CANVAS_H - PADDLE_HEIGHT - PADDLE_MARGIN
PADDLE_START_Y = CANVAS_H / 2 - PADDLE_HEIGHT / 2

# Paddle faces the ball collides with
LEFT_PADDLE_X = PADDLE_INSET
LEFT_FACE_X = LEFT_PADDLE_X + PADDLE_WIDTH
RIGHT_FACE_X = CANVAS_W - PADDLE_INSET - PADDLE_WIDTH

# How far past a paddle the ball must travel before the point is lost
LEFT_MISS_X = LEFT_PADDLE_X - 30
RIGHT_MISS_X = RIGHT_FACE_X + 40

WALL_MARGIN = 4
BALL_RADIUS = 9
BALL_SERVE_SPEED = 360.0
BOUNCE_ACCELERATION = 1.04
MAX_BOUNCE_ANGLE = math.pi / 3
SERVE_JITTER = 0.3
SNAP_GAP = 0.5

WIN_SCORE = 10
TICK_HZ = 60

SIDE_A = 'A'
SIDE_B = 'B'
SPECTATOR = 'S'
PLAYER_SIDES = (SIDE_A, SIDE_B)
