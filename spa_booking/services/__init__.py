# Services package init
"""
Spa Booking API - Services Layer
=================================

Every service follows the same request contract:

    validate → persist (one statement) → shape the response

    1. Validate the parsed request into a typed record, or raise
       ValidationError before touching the store
    2. Issue exactly one statement through the request's session
    3. Zero affected rows → NotFoundError; store failure → StoreError

Service Inventory:
    - BookingService: list / create / delete bookings
    - TestimonialService: create / list / delete testimonials
    - PaymentService: simulated initiation (no store) and confirmation

Services hold no state; each is a module-level singleton.
"""
