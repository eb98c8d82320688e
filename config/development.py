import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "tobacco_workforce"),
}

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also upsert the demo accounts on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

# Local files: pay rates and saved-progress drafts
DATA_DIR = os.getenv("DATA_DIR", "data")
DRAFT_TTL_HOURS = int(os.getenv("DRAFT_TTL_HOURS", "72"))

# Optional account checked before the accounts table (password hash from werkzeug)
FALLBACK_ACCOUNT = {
    "email": os.getenv("FALLBACK_EMAIL", ""),
    "full_name": os.getenv("FALLBACK_NAME", "Fallback Admin"),
    "password_hash": os.getenv("FALLBACK_PASSWORD_HASH", ""),
    "role": os.getenv("FALLBACK_ROLE", "admin"),
}
