"""Domain layer for ledgerdesk application."""

# Services import the storage layer, which imports domain entities, so they
# are resolved lazily.
_SERVICES = {
    "AnalysisService": "ledgerdesk.domain.analysis",
    "ClosedCustomerService": "ledgerdesk.domain.closed_customers",
    "CSVImportService": "ledgerdesk.domain.csv_import",
    "ReconciliationService": "ledgerdesk.domain.reconciliation",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        import importlib

        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
