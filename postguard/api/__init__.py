"""
postguard.api

Couche transport HTTP (FastAPI).

- process : handler aval (placeholder)
- health  : GET /health
- router  : assemblage "/" (validé) + "/health"
"""
