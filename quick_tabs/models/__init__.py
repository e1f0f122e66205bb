from quick_tabs.models.browser import (  # noqa: F401
    KNOWN_BROWSERS,
    Browser,
    DetectionResult,
    LogicalBrowser,
    canonical_path,
    logical_browser_for,
)
