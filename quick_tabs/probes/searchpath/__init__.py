"""Search-path and install-directory detection."""
