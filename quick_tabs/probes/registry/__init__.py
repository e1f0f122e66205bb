"""Windows registry detection."""
