"""Kernel security – authorization capability."""
from blocked_numbers.kernel.security.authorizer import AllowAllAuthorizer, Authorizer

__all__ = ["AllowAllAuthorizer", "Authorizer"]
