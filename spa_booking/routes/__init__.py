# Routes package init
"""
Spa Booking API - API Routes Package
=====================================

Route Inventory:
    - bookings.py:      GET    /booking_spa12
                        POST   /booking_spa12
                        DELETE /booking_spa12/{id}
    - payments.py:      POST   /api/payments/initiate
                        POST   /api/payments/confirm
    - testimonials.py:  POST   /api/testimonials
                        GET    /api/testimonials
                        DELETE /api/testimonials/{id}
    - health.py:        GET    /health

Routes are THIN: take the parsed request, call one service method, return
its result. Status codes for failures come from the global exception
handlers in main.py.
"""
