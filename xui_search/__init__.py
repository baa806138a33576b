"""
xui-search - incremental inbound and client search for proxy panels
"""

__version__ = "0.3.0"
