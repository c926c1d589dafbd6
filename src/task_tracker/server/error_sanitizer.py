"""
Error Sanitization Utility for the transports.

Internal failures can carry storage details in their messages (database
URLs, file paths, SQL statements and bound parameters, credentials). Those
are scrubbed before a message leaves the process.
"""

import re

# Regex patterns for sensitive data detection, applied in order
PATTERNS = {
    "sql_statement": [
        r"\[SQL: .*?\]",
    ],
    "sql_parameters": [
        r"\[parameters: .*?\]",
    ],
    "db_connection": [
        r"sqlite:///[^\s\"']+",
        r"postgresql(\+\w+)?://[^\s\"']+",
        r"mysql(\+\w+)?://[^\s\"']+",
    ],
    "file_paths": [
        r"/[\w\-./]+/[\w\-./]+",
        r"[A-Z]:\\[\w\-\\./]+",
    ],
    "auth_tokens": [
        r"token[=:]\s*['\"]?[\w\-._]+['\"]?",
        r"password[=:]\s*['\"]?[^\s\"']+['\"]?",
        r"bearer\s+[\w\-._]+",
    ],
}

REPLACEMENTS = {
    "sql_statement": "[REDACTED_SQL]",
    "sql_parameters": "[REDACTED_PARAMETERS]",
    "db_connection": "[REDACTED_DB_CONNECTION]",
    "file_paths": "[REDACTED_PATH]",
    "auth_tokens": "[REDACTED_CREDENTIAL]",
}

# SQLAlchemy appends a documentation link to every DBAPI error
_BACKGROUND_LINK = re.compile(r"\s*\(Background on this error at: [^)]*\)")


def sanitize_error_message(message: str) -> str:
    """Sanitize an error message by removing sensitive information."""
    sanitized = _BACKGROUND_LINK.sub("", message)
    for category, patterns in PATTERNS.items():
        replacement = REPLACEMENTS[category]
        for pattern in patterns:
            sanitized = re.sub(pattern, replacement, sanitized, flags=re.IGNORECASE | re.DOTALL)
    return sanitized.strip()


def sanitize_exception(exception: BaseException) -> str:
    """Sanitize an exception by removing sensitive information from its message."""
    exception_type = type(exception).__name__
    sanitized_message = sanitize_error_message(str(exception))
    return f"{exception_type}: {sanitized_message}"
