"""
Constantes globales pour Puter Proxy.
"""

# ============================================================================
# CONFIGURATION PAR DÉFAUT
# ============================================================================
PUTER_API_BASE_URL = "https://api.puter.com"
PUTER_TOKEN_ENV = "PUTER_TOKEN"
PUTER_BASE_URL_ENV = "PUTER_API_BASE_URL"
DEFAULT_CHAT_MODEL = "gpt-4o-mini"
MAX_BODY_SIZE = 10 * 1024 * 1024  # 10 Mo

# ============================================================================
# ENDPOINTS PUTER
# ============================================================================
ENDPOINT_READDIR = "/readdir"
ENDPOINT_READ = "/read"
ENDPOINT_BATCH = "/batch"
ENDPOINT_DRIVERS_CALL = "/drivers/call"

# Méthodes fs -> endpoint
FS_ENDPOINTS = {
    "readdir": ENDPOINT_READDIR,
    "read": ENDPOINT_READ,
    "write": ENDPOINT_BATCH,
}

# ============================================================================
# DRIVERS PUTER
# ============================================================================
INTERFACE_IMAGE_GENERATION = "puter-image-generation"
INTERFACE_CHAT_COMPLETION = "puter-chat-completion"
INTERFACE_KVSTORE = "puter-kvstore"

# Méthodes ai -> (interface, driver, méthode driver)
AI_DRIVERS = {
    "txt2img": (INTERFACE_IMAGE_GENERATION, "ai-image", "generate"),
    "chat": (INTERFACE_CHAT_COMPLETION, "ai-chat", "complete"),
}

# ============================================================================
# STREAMING
# ============================================================================
NDJSON_MARKER = "ndjson"
SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
}
