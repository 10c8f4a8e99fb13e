"""Batch-decrypt password-protected PDFs with a bundled qpdf executable."""

__version__ = "1.0.0"
