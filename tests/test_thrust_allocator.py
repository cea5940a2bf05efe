"""
Tests for ThrustAllocator - three thruster OpenROV layout.
"""
import pytest
import numpy as np
from rov_teleop.thrust_allocator import ThrustAllocator, AllocationError


class TestThrustAllocatorInitialization:
    """Test ThrustAllocator initialization and parameter validation."""

    def test_default_initialization(self):
        """Test ThrustAllocator initializes with default parameters."""
        allocator = ThrustAllocator()
        assert allocator.d == 0.045

    def test_custom_initialization(self):
        """Test ThrustAllocator with custom offset."""
        allocator = ThrustAllocator(thruster_offset=0.1)
        assert allocator.d == 0.1

    def test_allocation_matrix(self):
        """Test allocation matrix structure."""
        allocator = ThrustAllocator(thruster_offset=0.045)
        expected = np.array([[1.0, 0.0, 1.0],
                             [0.0, 1.0, 0.0],
                             [-0.045, 0.0, 0.045]])
        assert np.allclose(allocator.allocation_matrix, expected)

    def test_allocation_matrix_is_copy(self):
        """Test that modifying the returned matrix leaves the allocator intact."""
        allocator = ThrustAllocator()
        A = allocator.allocation_matrix
        A[:] = 0.0
        assert np.isclose(np.linalg.det(allocator.allocation_matrix), 2 * allocator.d)

    def test_zero_offset_is_singular(self):
        """Test that zero offset raises an allocation error."""
        with pytest.raises(AllocationError, match="singular"):
            ThrustAllocator(thruster_offset=0.0)

    def test_allocation_error_is_value_error(self):
        """Test AllocationError can be handled as a ValueError."""
        with pytest.raises(ValueError):
            ThrustAllocator(thruster_offset=0.0)

    def test_non_finite_offset(self):
        """Test that non-finite offsets raise errors."""
        with pytest.raises(AllocationError):
            ThrustAllocator(thruster_offset=float('nan'))
        with pytest.raises(AllocationError):
            ThrustAllocator(thruster_offset=float('inf'))

    def test_vanishing_offset(self):
        """Test that a numerically zero offset is rejected."""
        with pytest.raises(AllocationError):
            ThrustAllocator(thruster_offset=1e-20)


class TestThrustAllocation:
    """Test thrust allocation computation."""

    @pytest.fixture
    def allocator(self):
        """Create allocator for testing."""
        return ThrustAllocator(thruster_offset=0.045)

    def test_zero_input(self, allocator):
        """Test with zero wrench."""
        T_port, T_vert, T_stbd = allocator.allocate(0.0, 0.0, 0.0)
        assert np.isclose(T_port, 0.0)
        assert np.isclose(T_vert, 0.0)
        assert np.isclose(T_stbd, 0.0)

    def test_pure_surge_force(self, allocator):
        """Test pure surge splits evenly between port and stbd."""
        T_port, T_vert, T_stbd = allocator.allocate(4.0, 0.0, 0.0)
        assert np.isclose(T_port, 2.0)
        assert np.isclose(T_vert, 0.0, atol=1e-12)
        assert np.isclose(T_stbd, 2.0)

    def test_pure_heave_force(self, allocator):
        """Test pure heave only drives the vertical thruster."""
        T_port, T_vert, T_stbd = allocator.allocate(0.0, 3.0, 0.0)
        assert np.isclose(T_port, 0.0, atol=1e-12)
        assert np.isclose(T_vert, 3.0)
        assert np.isclose(T_stbd, 0.0, atol=1e-12)

    def test_pure_yaw_torque(self, allocator):
        """Test pure yaw torque gives antisymmetric port/stbd forces."""
        tau_z = 0.3
        T_port, T_vert, T_stbd = allocator.allocate(0.0, 0.0, tau_z)

        assert np.isclose(T_port, -T_stbd)
        assert T_stbd > T_port
        # tau_z = d * (T_stbd - T_port)
        assert np.isclose(allocator.d * (T_stbd - T_port), tau_z)
        assert np.isclose(T_vert, 0.0, atol=1e-12)

    def test_symmetry(self, allocator):
        """Test that reversing torque swaps port and stbd."""
        T_port_1, _, T_stbd_1 = allocator.allocate(2.0, 0.0, 0.1)
        T_port_2, _, T_stbd_2 = allocator.allocate(2.0, 0.0, -0.1)
        assert np.isclose(T_port_1, T_stbd_2)
        assert np.isclose(T_stbd_1, T_port_2)

    def test_wrench_reproduced(self, allocator):
        """Test A @ T reproduces the requested wrench."""
        F = (4.0, -3.0, 0.3)
        T = allocator.allocate(*F)
        assert np.allclose(allocator.wrench(*T), F)


class TestAllocationInverse:
    """Test A^-1 A T = T for a range of geometries."""

    @pytest.mark.parametrize("d", [0.045, 0.1, 1.0, 1e-3, -0.2])
    def test_round_trip(self, d):
        """Test that allocating A @ T recovers T."""
        allocator = ThrustAllocator(thruster_offset=d)
        rng = np.random.default_rng(42)

        for _ in range(20):
            T = rng.uniform(-20.0, 20.0, size=3)
            F = allocator.wrench(*T)
            assert np.allclose(allocator.allocate(*F), T, atol=1e-9)

    @pytest.mark.parametrize("d", [0.045, 0.5, -0.1])
    def test_determinant(self, d):
        """Test det(A) = 2d."""
        allocator = ThrustAllocator(thruster_offset=d)
        assert np.isclose(np.linalg.det(allocator.allocation_matrix), 2 * d)
