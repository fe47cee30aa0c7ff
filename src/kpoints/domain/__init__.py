"""Domain layer for kpoints application."""

_SERVICES = {
    "UserDirectory": "kpoints.domain.directory",
    "DailyLimitTracker": "kpoints.domain.daily_limit",
    "LedgerService": "kpoints.domain.ledger",
    "ReportingService": "kpoints.domain.reporting",
    "AdminService": "kpoints.domain.admin",
    "UserImportService": "kpoints.domain.user_import",
    "ExportService": "kpoints.domain.export",
}

__all__ = list(_SERVICES)


# Import services lazily to avoid circular dependencies with the database layer
def __getattr__(name):
    if name in _SERVICES:
        from importlib import import_module

        return getattr(import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
