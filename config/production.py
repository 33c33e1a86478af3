import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "smarttrack"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "smarttrack"),
    "connection_timeout": int(os.getenv("DB_CONNECT_TIMEOUT", "10")),
}

JWT_SECRET = os.getenv("JWT_SECRET", "please-set-JWT_SECRET")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")

CIVIL_UTC_OFFSET_MINUTES = int(os.getenv("CIVIL_UTC_OFFSET_MINUTES", "330"))
GEOFENCE_MATCH_POLICY = os.getenv("GEOFENCE_MATCH_POLICY", "first")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
