"""
Application-level constants for hardcoded protocol behavior.

These values define the wire protocol spoken with chat clients and should
NEVER be changed via environment variables or configuration.

For configurable values (ports, timeouts, CORS policy, logging), see
chat_relay/settings.py where values can be overridden via environment
variables.
"""

# ============================================================================
# Event Names
# ============================================================================

# Outbound: current number of connected clients (integer data)
USERS_EVENT = "users"

# Outbound: chat text relayed to every client (string data)
MESSAGE_EVENT = "message"

# Inbound: chat text sent by a client
CHAT_EVENT = "chat"


# ============================================================================
# WebSocket Protocol Constants
# ============================================================================

# RFC 6455 close code used when a frame does not match the envelope
WS_UNSUPPORTED_DATA_CODE = 1003

# RFC 6455 close code used when a connection cannot be registered
WS_INTERNAL_ERROR_CODE = 1011


# ============================================================================
# Logging
# ============================================================================

# Maximum size of a single structured log line before the message is truncated
MAX_LOG_SIZE_BYTES = 64 * 1024
