"""Constants for the completion endpoint and the transcript failure notice."""

# Remote completion service
COMPLETION_ENDPOINT = "https://api.anthropic.com/v1/messages"
PROTOCOL_VERSION = "2023-06-01"
CREDENTIAL_HEADER = "x-api-key"
PROTOCOL_VERSION_HEADER = "anthropic-version"

# Used when the selected model id has no descriptor in the catalog
DEFAULT_MAX_TOKENS = 4096


# Best-effort fallback when an error body carries no message
UNKNOWN_ERROR_MESSAGE = "Unknown error"

# Shown in the transcript for every handled failure; details go to diagnostics only
FAILURE_NOTICE = (
    "Something went wrong while sending your message. "
    "Check the API configuration and try again."
)

# Diagnostic channel retention
MAX_FAILURE_RECORDS = 50
