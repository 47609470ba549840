"""Jira release gate: config, URL safety, issue keys and action planning."""

from .config import JiraConfig, normalize
from .issues import extract_issue_keys
from .plugin import ExecuteRequest, ExecuteResponse, Hook, JiraPlugin
from .urlsafety import is_private_ip, validate_base_url
from .validation import FieldError, ValidationResult, validate

__all__ = [
    "ExecuteRequest",
    "ExecuteResponse",
    "FieldError",
    "Hook",
    "JiraConfig",
    "JiraPlugin",
    "ValidationResult",
    "extract_issue_keys",
    "is_private_ip",
    "normalize",
    "validate",
    "validate_base_url",
]
