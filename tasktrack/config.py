import os

from dotenv import load_dotenv

# Load .env from the working directory so local settings are picked up.
load_dotenv()


class Config:
    DATA_DIR = os.environ.get("TASKTRACK_DATA_DIR", os.path.join(os.getcwd(), "data"))
    TASKS_FILE = os.environ.get("TASKTRACK_TASKS_FILE") or os.path.join(DATA_DIR, "tasks.json")
    UPLOAD_FOLDER = os.environ.get("TASKTRACK_UPLOAD_FOLDER") or os.path.join(DATA_DIR, "uploads")
    MAX_CONTENT_LENGTH = int(os.environ.get("TASKTRACK_MAX_UPLOAD_MB", "16")) * 1024 * 1024

    CORS_ORIGINS = os.environ.get("CORS_ORIGINS", "*")
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    ENV = os.environ.get("FLASK_ENV", "development")
    DEBUG = os.environ.get("FLASK_DEBUG", "1") == "1"
    JSON_SORT_KEYS = False
