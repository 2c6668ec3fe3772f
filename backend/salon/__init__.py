"""
Salon Booking System
"""
