"""User-facing interfaces for docxref."""
