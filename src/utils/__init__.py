"""HTTP client and output utilities."""
