import os

SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME_SUPER_SECRET")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(24 * 60)))

DATA_DIR = os.path.abspath(os.getenv("CLOUDFILES_DATA_DIR", "./data"))
USERS_DB_NAME = "users.db"
FILES_DIR_NAME = "files"

HOST = os.getenv("CLOUDFILES_HOST", "0.0.0.0")
PORT = int(os.getenv("CLOUDFILES_PORT", "8080"))
