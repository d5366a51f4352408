"""
Spa Booking API - Application Package Initializer
==================================================

What: Marks the `spa_booking` directory as a Python package.
Why:  Enables module imports like `from spa_booking.config import settings`.
Who:  Used by uvicorn (`spa_booking.main:app`), pytest, and `python -m spa_booking`.

Architecture Note:
    The backend follows the same layered split for every resource:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← method + path, status codes
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← validate → persist → shape
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async engine owned by the app
    └─────────────────────────────────────┘

    Bookings, testimonials and payments all go through that stack; a route
    never talks to the database without a service in between.
"""

__version__ = "1.0.0"
