"""mailconfig - administration API for a multi-tenant mail server"""

__version__ = "0.1.0"
