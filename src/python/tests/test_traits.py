"""
===============================================================================
KINDER QUATERNIONS - Multiplication / Comparison Trait Test Suite
===============================================================================
Tests for the Hamilton product, the multiplication result-type table across
Quaternion / UnitQuaternion and precisions, exact and tolerant comparison,
and registration of additional quaternion kinds.
===============================================================================
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_array_equal

from kinder_quaternions import (
    Quaternion, QuaternionF, UnitQuaternion, UnitQuaternionF,
    UnitNormError, debug_assertions, is_equal, is_near, multiply,
)
from kinder_quaternions import traits
from kinder_quaternions.quaternion import quaternion_type_for


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def basis():
    """Return the basis quaternions 1, i, j, k."""
    return {
        '1': Quaternion(1.0, 0.0, 0.0, 0.0),
        'i': Quaternion(0.0, 1.0, 0.0, 0.0),
        'j': Quaternion(0.0, 0.0, 1.0, 0.0),
        'k': Quaternion(0.0, 0.0, 0.0, 1.0),
    }


@pytest.fixture
def quat_90z():
    """Return a unit quaternion representing 90-degree rotation about Z axis."""
    return UnitQuaternion(np.cos(np.pi / 4), 0.0, 0.0, np.sin(np.pi / 4))


@pytest.fixture
def quat_45x():
    """Return a unit quaternion representing 45-degree rotation about X axis."""
    return UnitQuaternion(np.cos(np.pi / 8), np.sin(np.pi / 8), 0.0, 0.0)


# =============================================================================
# Test: Hamilton product
# =============================================================================

class TestHamiltonProduct:
    """Tests for the Hamiltonian convention i*i = j*j = k*k = i*j*k = -1."""

    @pytest.mark.parametrize("name", ['i', 'j', 'k'])
    def test_squares(self, basis, name):
        """i*i = j*j = k*k = -1."""
        product = basis[name] * basis[name]
        assert_array_equal(product.get_vector4(), [-1.0, 0.0, 0.0, 0.0])

    def test_ijk(self, basis):
        """i*j*k = -1."""
        product = basis['i'] * basis['j'] * basis['k']
        assert_array_equal(product.get_vector4(), [-1.0, 0.0, 0.0, 0.0])

    @pytest.mark.parametrize("left,right,expected", [
        ('i', 'j', [0.0, 0.0, 0.0, 1.0]),
        ('j', 'k', [0.0, 1.0, 0.0, 0.0]),
        ('k', 'i', [0.0, 0.0, 1.0, 0.0]),
        ('j', 'i', [0.0, 0.0, 0.0, -1.0]),
    ])
    def test_basis_products(self, basis, left, right, expected):
        """Cyclic products of the basis, and anti-commutativity."""
        assert_array_equal((basis[left] * basis[right]).get_vector4(), expected)

    def test_identity_is_neutral(self, basis):
        """1 * q = q * 1 = q."""
        q = Quaternion(1.0, 2.0, 3.0, 4.0)
        assert basis['1'] * q == q
        assert q * basis['1'] == q

    def test_general_product(self):
        """(1 + 2i + 3j + 4k)(5 + 6i + 7j + 8k) = -60 + 12i + 30j + 24k."""
        product = multiply(Quaternion(1.0, 2.0, 3.0, 4.0), Quaternion(5.0, 6.0, 7.0, 8.0))
        assert_array_equal(product.get_vector4(), [-60.0, 12.0, 30.0, 24.0])

    def test_norm_is_multiplicative(self):
        """|a * b| = |a| |b|."""
        a = Quaternion(1.0, -2.0, 0.5, 3.0)
        b = Quaternion(-0.3, 1.5, 2.0, -1.0)
        assert_allclose((a * b).norm(), a.norm() * b.norm(), rtol=1e-14)


# =============================================================================
# Test: Result type table
# =============================================================================

class TestResultTypes:
    """Tests for the multiplication table across kinds and precisions."""

    def test_quaternion_times_quaternion(self):
        assert type(Quaternion(1.0, 0, 0, 0) * Quaternion(1.0, 0, 0, 0)) is Quaternion

    def test_quaternion_times_unit(self, quat_90z):
        assert type(Quaternion(2.0, 0, 0, 0) * quat_90z) is Quaternion

    def test_unit_times_quaternion(self, quat_90z):
        assert type(quat_90z * Quaternion(2.0, 0, 0, 0)) is Quaternion

    def test_unit_times_unit(self, quat_90z, quat_45x):
        """The product of unit quaternions is a checked unit quaternion."""
        product = quat_90z * quat_45x
        assert type(product) is UnitQuaternion
        assert_allclose(product.norm(), 1.0, atol=1e-15)

    def test_unit_product_is_checked(self):
        """Unit inputs that were accepted unchecked fail on multiplication."""
        with debug_assertions(False):
            broken = UnitQuaternion(2.0, 0.0, 0.0, 0.0)
        with debug_assertions(True):
            with pytest.raises(UnitNormError):
                broken * UnitQuaternion()

    def test_float_stays_float(self):
        product = QuaternionF(1.0, 2.0, 3.0, 4.0) * QuaternionF(0.0, 1.0, 0.0, 0.0)
        assert type(product) is QuaternionF
        assert product.to_implementation().dtype == np.float32

    def test_mixed_precision_promotes(self, quat_90z):
        """Mixing float32 and float64 gives a float64 result."""
        assert type(QuaternionF(1.0, 0, 0, 0) * Quaternion(1.0, 0, 0, 0)) is Quaternion
        assert type(UnitQuaternionF() * quat_90z) is UnitQuaternion
        assert type(quat_90z * UnitQuaternionF()) is UnitQuaternion

    def test_composition_matches_rotation(self, quat_90z):
        """Two 90-degree z rotations compose to a 180-degree z rotation."""
        product = quat_90z * quat_90z
        assert_allclose(product.get_vector4(), [0.0, 0.0, 0.0, 1.0], atol=1e-15)

    def test_unsupported_operands(self):
        """multiply() rejects operands without a table entry."""
        with pytest.raises(TypeError):
            multiply(Quaternion(), np.zeros(4))


# =============================================================================
# Test: Comparison
# =============================================================================

class TestComparison:
    """Tests for exact and tolerant comparison."""

    def test_is_equal_across_kinds(self):
        """A Quaternion and a UnitQuaternion with equal coefficients are equal."""
        q = Quaternion(0.0, 1.0, 0.0, 0.0)
        u = UnitQuaternion(0.0, 1.0, 0.0, 0.0)
        assert is_equal(q, u)
        assert q == u
        assert u == q

    def test_is_equal_exact(self):
        """is_equal() does not apply any tolerance."""
        assert not is_equal(Quaternion(1.0, 0, 0, 0), Quaternion(1.0 + 1e-15, 0, 0, 0))

    def test_is_equal_across_precisions(self):
        """Exactly representable values compare equal across precisions."""
        assert is_equal(QuaternionF(0.5, 0.25, 0.0, -1.0), Quaternion(0.5, 0.25, 0.0, -1.0))

    def test_is_near(self):
        """is_near() accepts differences within the tolerance."""
        a = Quaternion(1.0, 0.0, 0.0, 0.0)
        b = Quaternion(1.0 + 1e-12, 0.0, -1e-12, 0.0)
        assert is_near(a, b)
        assert not is_near(a, b, tolerance=1e-13)

    def test_is_near_float(self):
        """float32 rounding is within a float32 tolerance."""
        q = Quaternion(0.1, 0.2, 0.3, 0.4)
        assert is_near(q.cast(QuaternionF), q, tolerance=1e-7)
        assert not is_near(q.cast(QuaternionF), q)

    def test_compare_non_quaternion(self):
        with pytest.raises(TypeError):
            is_equal(Quaternion(), (0.0, 0.0, 0.0, 0.0))
        with pytest.raises(TypeError):
            is_near(Quaternion(), (0.0, 0.0, 0.0, 0.0))


# =============================================================================
# Test: Registration
# =============================================================================

class TestRegistration:
    """Tests for adding new kinds to the trait table."""

    def test_subclass_inherits_entries(self):
        """A subclass is covered by the entries of its base class."""

        class TaggedQuaternion(Quaternion):
            pass

        product = TaggedQuaternion(0.0, 1.0, 0.0, 0.0) * Quaternion(0.0, 0.0, 1.0, 0.0)
        assert type(product) is Quaternion
        assert_array_equal(product.get_vector4(), [0.0, 0.0, 0.0, 1.0])

    def test_register_new_entry(self, monkeypatch):
        """A registered entry overrides the inherited result family."""

        class PureQuaternion(Quaternion):
            pass

        # the table entry is dropped again after the test
        monkeypatch.setattr(traits, "_MULTIPLICATION_TRAITS", dict(traits._MULTIPLICATION_TRAITS))
        traits.register_multiplication(PureQuaternion, PureQuaternion,
                                       lambda scalar_type: PureQuaternion)
        product = PureQuaternion(0.0, 1.0, 0.0, 0.0) * PureQuaternion(0.0, 0.0, 1.0, 0.0)
        assert type(product) is PureQuaternion
        # entries for the base classes are untouched
        assert type(Quaternion() * Quaternion()) is quaternion_type_for(np.float64)

    def test_table_holds_package_types(self):
        """Only the package's own kinds are registered between tests."""
        for left, right in traits._MULTIPLICATION_TRAITS:
            assert left.__module__.startswith('kinder_quaternions.')
            assert right.__module__.startswith('kinder_quaternions.')
