"""
Couche API (FastAPI).
"""
