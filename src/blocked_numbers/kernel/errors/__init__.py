"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError              (domain.py)
    │   ├── InvalidArgumentError
    │   └── ConstraintViolationError
    ├── ApplicationError         (application.py)
    │   ├── UnsupportedOperationError
    │   └── ForbiddenError
    └── InfrastructureError      (infrastructure.py)
        ├── SelectionSyntaxError
        └── CountryDetectionError
"""

from blocked_numbers.kernel.errors.application import (
    ApplicationError,
    ForbiddenError,
    UnsupportedOperationError,
)
from blocked_numbers.kernel.errors.base import BaseError
from blocked_numbers.kernel.errors.domain import (
    ConstraintViolationError,
    DomainError,
    InvalidArgumentError,
)
from blocked_numbers.kernel.errors.infrastructure import (
    CountryDetectionError,
    InfrastructureError,
    SelectionSyntaxError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "ConstraintViolationError",
    "CountryDetectionError",
    "DomainError",
    "ForbiddenError",
    "InfrastructureError",
    "InvalidArgumentError",
    "SelectionSyntaxError",
    "UnsupportedOperationError",
]
