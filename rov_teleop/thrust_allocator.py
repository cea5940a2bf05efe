"""
Thrust allocator for the three thruster OpenROV layout.
Maps surge force, heave force and yaw torque to port/vertical/starboard thruster forces.
"""
import math
from typing import Tuple

import numpy as np
from scipy.linalg import lu_factor, lu_solve


class AllocationError(ValueError):
    """Raised when the allocation matrix cannot be inverted or yields non-finite forces."""


class ThrustAllocator:
    """
    Allocates a body wrench to the port, vertical and starboard thrusters.

    Port and starboard thrusters push along the body x-axis at a lateral
    offset d from the centerline, the vertical thruster pushes along z:
    F_surge = T_port + T_stbd
    F_heave = T_vert
    tau_z   = d * (T_stbd - T_port)

    In matrix form A @ T = F with
        A = [[ 1, 0, 1],
             [ 0, 1, 0],
             [-d, 0, d]]
    which has det(A) = 2d, so it is full rank for any nonzero d.
    """

    # Any reasonable thruster offset gives cond(A) of order 1/d
    MAX_CONDITION_NUMBER = 1e12

    def __init__(self, thruster_offset: float = 0.045):
        """
        Initialize thrust allocator.

        Args:
            thruster_offset: Lateral distance of port/stbd thrusters from centerline [m]

        Raises:
            AllocationError: If the resulting allocation matrix is singular
        """
        if not math.isfinite(thruster_offset):
            raise AllocationError("Thruster offset must be finite")
        if thruster_offset == 0.0:
            raise AllocationError("Thruster offset must be nonzero, allocation matrix is singular")

        self.d = float(thruster_offset)
        self._A = np.array([[1.0, 0.0, 1.0],
                            [0.0, 1.0, 0.0],
                            [-self.d, 0.0, self.d]])

        det = float(np.linalg.det(self._A))
        cond = float(np.linalg.cond(self._A))
        if not math.isfinite(det) or abs(det) < np.finfo(float).eps or cond > self.MAX_CONDITION_NUMBER:
            raise AllocationError(
                f"Allocation matrix is singular or ill-conditioned (det={det:.3g}, cond={cond:.3g})"
            )

        # Matrix is constant for the lifetime of the allocator
        self._lu = lu_factor(self._A)

    @property
    def allocation_matrix(self) -> np.ndarray:
        """Return a copy of the allocation matrix A."""
        return self._A.copy()

    def allocate(self, F_surge: float, F_heave: float, tau_z: float) -> Tuple[float, float, float]:
        """
        Allocate surge force, heave force and yaw torque to thrusters.

        Args:
            F_surge: Desired surge force in body frame [N]
            F_heave: Desired heave force in body frame [N]
            tau_z: Desired yaw torque [N⋅m]

        Returns:
            (T_port, T_vert, T_stbd): Thruster forces [N]
        """
        F = np.array([F_surge, F_heave, tau_z], dtype=float)
        T = lu_solve(self._lu, F)

        if not np.all(np.isfinite(T)):
            raise AllocationError(f"Allocation produced non-finite thruster forces: {T}")

        return float(T[0]), float(T[1]), float(T[2])

    def wrench(self, T_port: float, T_vert: float, T_stbd: float) -> Tuple[float, float, float]:
        """
        Forward map from thruster forces to body wrench (A @ T).

        Returns:
            (F_surge, F_heave, tau_z)
        """
        F = self._A @ np.array([T_port, T_vert, T_stbd], dtype=float)
        return float(F[0]), float(F[1]), float(F[2])
