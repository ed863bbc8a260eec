# domain/routing/metrics.py
import numpy as np

from taxi_path.app.protocols import DistanceMetric

EARTH_RADIUS_M = 6_371_000.0


class HaversineMetric(DistanceMetric):
    """Great-circle distance in meters. Works on scalars or numpy arrays."""

    def __init__(self, radius_m: float = EARTH_RADIUS_M):
        self.radius_m = radius_m

    def distance_m(self, lat1, lng1, lat2, lng2):
        phi1, phi2 = np.radians(lat1), np.radians(lat2)
        dphi = phi2 - phi1
        dlmb = np.radians(np.subtract(lng2, lng1))
        s = np.sin(dphi / 2) ** 2 + np.cos(phi1) * np.cos(phi2) * np.sin(dlmb / 2) ** 2
        return 2 * self.radius_m * np.arcsin(np.sqrt(np.clip(s, 0.0, 1.0)))


class EquirectangularMetric(DistanceMetric):
    """Planar approximation; fine at city scale, cheaper than haversine."""

    def __init__(self, radius_m: float = EARTH_RADIUS_M):
        self.radius_m = radius_m

    def distance_m(self, lat1, lng1, lat2, lng2):
        mean_phi = np.radians(np.add(lat1, lat2) / 2)
        x = np.radians(np.subtract(lng2, lng1)) * np.cos(mean_phi)
        y = np.radians(np.subtract(lat2, lat1))
        return self.radius_m * np.hypot(x, y)
