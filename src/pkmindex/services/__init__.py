"""Service layer — operations returning ServiceResult."""

from pkmindex.services.result import ServiceError, ServiceResult

__all__ = ["ServiceError", "ServiceResult"]
