"""
Merkle Distributor HTTP API (FastAPI)

- GET /root - Published root and signature domain
- GET /proofs/{address} - Proof lookup
- POST /claims - Submit a claim
- GET /claims/{address} - Claimed flag
- GET /health - Health check

Usage:
    uvicorn api.app:app --reload
"""

__version__ = "0.1.0"
