import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Price Data Source
DATA_DIRECTORY = os.getenv("DATA_DIRECTORY", "data")
DATA_FILE_PATTERN = os.getenv("DATA_FILE_PATTERN", "*_values.csv")
MALFORMED_RECORD_POLICY = os.getenv("MALFORMED_RECORD_POLICY", "fail").lower()  # "fail" or "skip"

# Logging
LOG_FILE = os.getenv("LOG_FILE", "service.log")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_MAX_BYTES = int(os.getenv("LOG_MAX_BYTES", 10485760))  # 10MB per file
LOG_BACKUP_COUNT = int(os.getenv("LOG_BACKUP_COUNT", 5))

# HTTP Server
SERVICE_HOST = os.getenv("SERVICE_HOST", "0.0.0.0")
SERVICE_PORT = int(os.getenv("SERVICE_PORT", 8080))
