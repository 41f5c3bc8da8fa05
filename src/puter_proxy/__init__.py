"""
Puter Proxy - relais HTTP vers l'API Puter.
"""

__version__ = "1.0.0"
