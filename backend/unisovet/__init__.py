"""UnisoVet: clinic console for clients, pets, appointments, stock and suppliers."""

__version__ = "0.1.0"
