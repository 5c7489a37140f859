"""Constants for sos-store."""

from pathlib import Path

# Blob identifiers accepted by a storage node
BLOB_ID_PATTERN = r"^[a-z0-9]+$"

# Storage node defaults
NODE_HOST = "127.0.0.1"
NODE_PORT = 3001
NODE_STORE = "data"

# Routing proxy defaults
PROXY_HOST = "0.0.0.0"
UPLOAD_PORT = 9991
DOWNLOAD_PORT = 9992

# Seconds allowed for each outbound request to a storage node
NODE_TIMEOUT = 30.0

# Node registry files, read in this order before any command-line nodes
SYSTEM_NODE_FILE = Path("/etc/sos.conf")
USER_NODE_FILE_NAME = ".sos.conf"

# Fixed response bodies
ALIVE_BODY = "alive"
INVALID_ID_BODY = "Alphanumeric IDs only."
MISSING_BODY = "404 - content is not hosted here."
NOT_FOUND_BODY = "404 page not found"
UPLOAD_FAILED_BODY = "Upload FAILED"
OBJECT_NOT_FOUND_BODY = "Object not found."
