"""Application errors.

Usage:
    from rbac_admin.application.errors import ApplicationError, ApplicationErrorCode
"""

from rbac_admin.application.errors.application_error import (
    ApplicationError,
    ApplicationErrorCode,
    from_domain_error,
)

__all__ = ["ApplicationError", "ApplicationErrorCode", "from_domain_error"]
