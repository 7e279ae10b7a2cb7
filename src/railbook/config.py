import os

DATA_DIR = os.environ.get("RAILBOOK_DATA_DIR", "data")
TRAINS_PATH = os.path.join(DATA_DIR, "trains.json")
USERS_PATH = os.path.join(DATA_DIR, "users.json")

BCRYPT_ROUNDS = 12
# bcrypt ignores input past this many bytes
BCRYPT_MAX_BYTES = 72

LOG_LEVEL = os.environ.get("RAILBOOK_LOG_LEVEL", "WARNING")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
