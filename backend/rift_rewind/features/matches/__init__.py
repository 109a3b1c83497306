"""Raw match storage helpers."""
