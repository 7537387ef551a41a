from .webhook import RiderNotifier, build_rider_notification

__all__ = ["RiderNotifier", "build_rider_notification"]
