import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "smarttrack_test"),
    "connection_timeout": 5,
}

JWT_SECRET = "test-jwt-secret"
JWT_ALGORITHM = "HS256"

CIVIL_UTC_OFFSET_MINUTES = 330
GEOFENCE_MATCH_POLICY = "first"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
AUTO_SEED_DB = False
