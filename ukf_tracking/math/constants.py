"""
Numerical and sensor constants for the unscented Kalman filter.
"""

# Timestamps are integer microseconds
MICROSECONDS_PER_SECOND = 1.0e6

# Dimensions
STATE_SIZE = 5         # [pos_x, pos_y, speed, yaw, yaw_rate]
AUGMENTED_SIZE = 7     # state + longitudinal and yaw acceleration noise
LIDAR_SIZE = 2         # [pos_x, pos_y]
RADAR_SIZE = 3         # [range, bearing, range_rate]

# Indices of angular components
YAW_INDEX = 3
BEARING_INDEX = 1

# Below this yaw rate the CTRV model falls back to straight-line motion
YAW_RATE_EPSILON = 1e-3

# Process noise (tunable)
STD_A = 3.0       # Longitudinal acceleration std-dev (m/s^2)
STD_YAWDD = 1.0   # Yaw acceleration std-dev (rad/s^2)

# Measurement noise, as provided by the sensor manufacturer
STD_LASPX = 0.15   # Lidar position x (m)
STD_LASPY = 0.15   # Lidar position y (m)
STD_RADR = 0.3     # Radar range (m)
STD_RADPHI = 0.03  # Radar bearing (rad)
STD_RADRD = 0.3    # Radar range rate (m/s)

# Initial state covariance is INITIAL_COVARIANCE_SCALE * I
INITIAL_COVARIANCE_SCALE = 0.5
