"""DentalDesk: dental practice records, appointments and analytics."""

__version__ = "1.0.0"
