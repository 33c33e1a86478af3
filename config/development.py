import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "smarttrack"),
    "connection_timeout": int(os.getenv("DB_CONNECT_TIMEOUT", "10")),
}

# Bearer tokens are HS256 JWTs carrying "id" and "role"
JWT_SECRET = os.getenv("JWT_SECRET", "dev-jwt-secret")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")

# Civil day boundaries (UTC+05:30)
CIVIL_UTC_OFFSET_MINUTES = int(os.getenv("CIVIL_UTC_OFFSET_MINUTES", "330"))
# "first" (store order) or "nearest"
GEOFENCE_MATCH_POLICY = os.getenv("GEOFENCE_MATCH_POLICY", "first")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo offices/users on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
