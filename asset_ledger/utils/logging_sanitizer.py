"""
Logging Sanitizer Utility

Redacts sensitive values from payloads, form data and URLs before they are logged.
Request bodies sent to the backend and continuation URLs returned by it both pass
through here on their way into the logs.
"""

from typing import Dict, Any
from urllib.parse import urlsplit, urlunsplit, parse_qsl, urlencode
from werkzeug.datastructures import MultiDict


# Fields that should never be logged
SENSITIVE_FIELDS = {
    'password',
    'secret',
    'token',
    'api_key',
    'apikey',
    'auth_token',
    'access_token',
    'refresh_token',
    'session_id',
    'sessionid',
    'csrf_token',
    'signature',
}


def sanitize_dict(data: Dict[str, Any], redact_text: str = '[REDACTED]') -> Dict[str, Any]:
    """
    Sanitize a dictionary by replacing sensitive field values with redaction text.

    Args:
        data: Dictionary to sanitize
        redact_text: Text to use for redacted values (default: '[REDACTED]')

    Returns:
        Sanitized copy with sensitive values replaced

    Example:
        >>> sanitize_dict({'item': 'Pump', 'csrf_token': 'abc'})
        {'item': 'Pump', 'csrf_token': '[REDACTED]'}
    """
    if not data:
        return data

    sanitized = {}
    for key, value in data.items():
        if str(key).lower() in SENSITIVE_FIELDS:
            sanitized[key] = redact_text
        elif isinstance(value, dict):
            sanitized[key] = sanitize_dict(value, redact_text)
        else:
            sanitized[key] = value

    return sanitized


def sanitize_form_data(form_data: MultiDict, redact_text: str = '[REDACTED]') -> Dict[str, Any]:
    """
    Sanitize Flask request.form data for safe logging.

    Example:
        >>> logger.debug(f"Asset form submitted: {sanitize_form_data(request.form)}")
    """
    return sanitize_dict(form_data.to_dict(), redact_text)


def sanitize_url(url: str, redact_text: str = 'REDACTED') -> str:
    """
    Redact sensitive query parameters from a URL.

    Continuation links are produced by the backend, so they may carry signed
    tokens in the query string.

    Example:
        >>> sanitize_url('https://api.example.com/assets/?page=2&token=abc')
        'https://api.example.com/assets/?page=2&token=REDACTED'
    """
    if not url:
        return url

    parts = urlsplit(url)
    if not parts.query:
        return url

    query = [
        (key, redact_text if key.lower() in SENSITIVE_FIELDS else value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
    ]
    return urlunsplit(parts._replace(query=urlencode(query, safe='')))
