"""Quick Tabs: find the browsers on this machine and open saved links in them."""

__version__ = "0.3.0"
