"""Utility functions for pdfsearch."""

from pdfsearch.utils.fingerprint import SourceFingerprint, file_sha256, is_fresh

__all__ = ["SourceFingerprint", "file_sha256", "is_fresh"]
