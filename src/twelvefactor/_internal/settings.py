import os

from twelvefactor import version

TWELVEFACTOR_VERSION = os.getenv("TWELVEFACTOR_VERSION", version.__version__)

ROOT_LOG_LEVEL = os.getenv("TWELVEFACTOR_ROOT_LOG_LEVEL", "ERROR").upper()
LOG_LEVEL = os.getenv("TWELVEFACTOR_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = os.getenv("TWELVEFACTOR_LOG_FORMAT", "standard").lower()

# Separates the app id from the process name in backend resource names.
# Unset or empty means the default delimiter.
DELIMITER = os.getenv("TWELVEFACTOR_DELIMITER") or None

# Unset means the ECS "default" cluster.
ECS_CLUSTER = os.getenv("TWELVEFACTOR_ECS_CLUSTER") or None
ECS_REGION = os.getenv("TWELVEFACTOR_ECS_REGION") or None
ECS_SERVICE_ROLE = os.getenv("TWELVEFACTOR_ECS_SERVICE_ROLE") or None
ECS_FORCE_REMOVE = os.getenv("TWELVEFACTOR_ECS_FORCE_REMOVE") is not None
