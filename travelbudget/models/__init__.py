from .trips.trip_model import TripRecord
