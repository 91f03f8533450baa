"""Audit logging package."""

from cashapp.audit.logger import AuditLogger

__all__ = ["AuditLogger"]
