"""pdfsearch - offline full-text search over a PDF's extracted text."""

__version__ = "0.2.0"
