"""freedesktop default-browser detection."""
