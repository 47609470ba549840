"""Core types shared by the Jira release gate."""

from .env import CredentialLookup, EnvironLookup, MappingLookup, first_set
from .result import Err, Ok, Result

__all__ = [
    # env
    "CredentialLookup",
    "EnvironLookup",
    "MappingLookup",
    "first_set",
    # result
    "Err",
    "Ok",
    "Result",
]
