"""Domain layer: enums and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.enums import DataSource, LoginOutcome
from app.domain.exceptions import (
    AuthenticationException,
    DuplicateEmailException,
    InfrastructureException,
    ResourceNotFoundException,
    StoreUnavailableException,
    UserAlreadyExistsException,
    UserServiceException,
    ValidationException,
)

__all__ = [
    # Enums
    "DataSource",
    "LoginOutcome",
    # Exceptions
    "AuthenticationException",
    "DuplicateEmailException",
    "InfrastructureException",
    "ResourceNotFoundException",
    "StoreUnavailableException",
    "UserAlreadyExistsException",
    "UserServiceException",
    "ValidationException",
]
