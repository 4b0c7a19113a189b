"""
                Resto Order Management

Staff-facing room-service ordering backend: static menu, in-memory
order store, kitchen WhatsApp notification, printable bills and
daily CSV export.
"""

__version__ = "1.0.0"
