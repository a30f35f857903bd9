"""Domain layer for quickynab application."""

# Services are resolved lazily so that entities and errors can be imported
# from the client layer without pulling in the services that depend on it.
_SERVICES = {
    "CSVImportService": "quickynab.domain.csv_import",
    "DialectRegistry": "quickynab.domain.dialects",
    "UploadService": "quickynab.domain.upload",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        import importlib

        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
