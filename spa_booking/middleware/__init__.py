# Middleware package init
"""
Spa Booking API - Middleware Package
=====================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID first: every later log line can carry it
    2. Logging: measures the full handler duration, including store calls
    3. CORS: any origin may call the API (the frontend is hosted separately)

JSON body parsing is done per route by FastAPI from the request models.
"""
