# Hotel Models
from hoteldesk.models.hotel import (
    Room, Guest, Booking, Bill, BillItem, ArchivedBill, Service, User
)

__all__ = [
    'Room', 'Guest', 'Booking', 'Bill', 'BillItem',
    'ArchivedBill', 'Service', 'User'
]
