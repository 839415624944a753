"""
V1 API router aggregator — wires all endpoint modules together.
"""

from fastapi import APIRouter

from fixora.api.v1.endpoints import admin, auth, bookings, contact, health, services

api_router = APIRouter()

# Auth (register, login, logout, me)
api_router.include_router(auth.router)

# Booking lifecycle
api_router.include_router(bookings.router)

# Service catalog
api_router.include_router(services.router)

# Admin dashboard: users, all bookings, analytics
api_router.include_router(admin.router)

# Contact form, health
api_router.include_router(contact.router)
api_router.include_router(health.router)
