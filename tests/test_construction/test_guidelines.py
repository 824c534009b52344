"""Tests for VSEPR guideline directions."""

import itertools

import numpy as np
import pytest

from gillespie.construction.guidelines import (
    Guideline,
    calculate_guidelines,
    effective_steric_number,
    empty_bond_capacity,
    guideline_directions,
    hard_points,
)
from gillespie.geometry import angle_between, normalise
from gillespie.model import MolecularStructure


def _pairwise_angles(dirs):
    return [angle_between(a, b) for a, b in itertools.combinations(dirs, 2)]


def _assert_unit_rows(dirs):
    np.testing.assert_allclose(np.linalg.norm(dirs, axis=1), 1.0)


# -- No hard points -----------------------------------------------------------

class TestNoHardPoints:
    def test_tetrahedral_with_default_pose(self):
        dirs = guideline_directions([0.0, 0.0, 0.0], [], 4)
        assert dirs.shape == (4, 3)
        np.testing.assert_allclose(dirs[0], [0.0, 1.0, 0.0])
        _assert_unit_rows(dirs)
        for angle in _pairwise_angles(dirs):
            assert angle == pytest.approx(109.5, abs=0.2)

    def test_first_direction_points_at_pose(self):
        core = np.array([1.0, 2.0, 3.0])
        dirs = guideline_directions(core, [], 4, pose=core + [0.0, 0.0, 2.0])
        np.testing.assert_allclose(dirs[0], [0.0, 0.0, 1.0], atol=1e-12)
        _assert_unit_rows(dirs)

    def test_trigonal(self):
        dirs = guideline_directions([0.0, 0.0, 0.0], [], 3, pose=[1.0, 0.0, 0.0])
        assert dirs.shape == (3, 3)
        for angle in _pairwise_angles(dirs):
            assert angle == pytest.approx(120.0)
        # Trigonal planar: the three directions sum to zero.
        np.testing.assert_allclose(dirs.sum(axis=0), 0.0, atol=1e-12)

    def test_linear(self):
        dirs = guideline_directions([0.0, 0.0, 0.0], [], 2, pose=[1.0, 1.0, 0.0])
        assert dirs.shape == (2, 3)
        np.testing.assert_allclose(dirs[1], -dirs[0])

    def test_single_domain(self):
        dirs = guideline_directions([0.0, 0.0, 0.0], [], 1)
        assert dirs.shape == (1, 3)

    def test_pose_on_core_falls_back_to_up(self):
        dirs = guideline_directions([0.5, 0.5, 0.5], [], 4, pose=[0.5, 0.5, 0.5])
        np.testing.assert_allclose(dirs[0], [0.0, 1.0, 0.0])
        assert np.all(np.isfinite(dirs))

    def test_pose_along_forward_is_finite(self):
        dirs = guideline_directions([0.0, 0.0, 0.0], [], 4, pose=[0.0, 0.0, 1.0])
        assert np.all(np.isfinite(dirs))
        _assert_unit_rows(dirs)
        for angle in _pairwise_angles(dirs):
            assert angle == pytest.approx(109.5, abs=0.2)


# -- One hard point -----------------------------------------------------------

class TestOneHardPoint:
    def test_linear_is_opposite(self):
        hard = np.array([0.0, 0.0, 1.0])
        dirs = guideline_directions([0.0, 0.0, 0.0], [hard], 2)
        np.testing.assert_allclose(dirs, [-hard])

    def test_trigonal(self):
        hard = np.array([1.0, 0.0, 0.0])
        dirs = guideline_directions(
            [0.0, 0.0, 0.0], [hard], 3, pose=[0.0, 1.0, 0.0],
        )
        assert dirs.shape == (2, 3)
        for d in dirs:
            assert angle_between(d, hard) == pytest.approx(120.0)
        assert angle_between(dirs[0], dirs[1]) == pytest.approx(120.0)

    def test_tetrahedral_umbrella(self):
        hard = np.array([0.0, 1.0, 0.0])
        dirs = guideline_directions(
            [0.0, 0.0, 0.0], [hard], 4, pose=[1.0, -0.3, 0.0],
        )
        assert dirs.shape == (3, 3)
        _assert_unit_rows(dirs)
        for d in dirs:
            assert angle_between(d, hard) == pytest.approx(109.5)
        for angle in _pairwise_angles(dirs):
            assert angle == pytest.approx(109.5, abs=0.2)

    def test_first_leg_follows_pose(self):
        hard = np.array([0.0, 1.0, 0.0])
        dirs = guideline_directions(
            [0.0, 0.0, 0.0], [hard], 4, pose=[1.0, -0.3, 0.0],
        )
        # The first leg lies in the plane of the hard point and the pose.
        assert dirs[0][2] == pytest.approx(0.0, abs=1e-12)
        assert dirs[0][0] > 0.0

    def test_pose_along_hard_point_is_finite(self):
        hard = np.array([0.0, 1.0, 0.0])
        dirs = guideline_directions([0.0, 0.0, 0.0], [hard], 4)
        assert dirs.shape == (3, 3)
        assert np.all(np.isfinite(dirs))

    def test_single_domain_has_no_room(self):
        dirs = guideline_directions([0.0, 0.0, 0.0], [[1.0, 0.0, 0.0]], 1)
        assert dirs.shape == (0, 3)


# -- Two hard points ----------------------------------------------------------

class TestTwoHardPoints:
    def test_tetrahedral_pair(self, ethane_fragment):
        _, c1, _, _ = ethane_fragment
        points = hard_points(c1)
        dirs = guideline_directions(c1.position, points, 4)
        assert dirs.shape == (2, 3)
        opposite = normalise(-points.sum(axis=0))
        for d in dirs:
            assert angle_between(d, opposite) == pytest.approx(54.75)
            for h in points:
                assert angle_between(d, h) == pytest.approx(109.5, abs=0.2)
        assert angle_between(dirs[0], dirs[1]) == pytest.approx(109.5)

    def test_trigonal_pair(self):
        h0 = np.array([1.0, 0.0, 0.0])
        h1 = np.array([np.cos(np.radians(120)), np.sin(np.radians(120)), 0.0])
        dirs = guideline_directions([0.0, 0.0, 0.0], [h0, h1], 3)
        np.testing.assert_allclose(dirs, [normalise(-(h0 + h1))], atol=1e-12)

    def test_collinear_pair_is_finite(self):
        points = [[1.0, 0.0, 0.0], [-1.0, 0.0, 0.0]]
        for steric in (3, 4):
            dirs = guideline_directions([0.0, 0.0, 0.0], points, steric)
            assert len(dirs) > 0
            assert np.all(np.isfinite(dirs))
            _assert_unit_rows(dirs)
            for d in dirs:
                assert angle_between(d, points[0]) == pytest.approx(90.0)

    def test_linear_pair_has_no_room(self):
        points = [[1.0, 0.0, 0.0], [-1.0, 0.0, 0.0]]
        dirs = guideline_directions([0.0, 0.0, 0.0], points, 2)
        assert dirs.shape == (0, 3)


# -- Three and four hard points -----------------------------------------------

class TestThreeOrMoreHardPoints:
    def test_three_points_give_opposite_of_sum(self):
        points = np.array([
            [0.0, 1.0, 0.0],
            [0.943, -0.333, 0.0],
            [-0.471, -0.333, 0.816],
        ])
        dirs = guideline_directions([0.0, 0.0, 0.0], points, 4)
        assert dirs.shape == (1, 3)
        np.testing.assert_allclose(dirs[0], normalise(-points.sum(axis=0)))

    def test_planar_points_give_normal(self):
        angles = np.radians([0.0, 120.0, 240.0])
        points = np.column_stack(
            [np.cos(angles), np.sin(angles), np.zeros(3)]
        )
        dirs = guideline_directions([0.0, 0.0, 0.0], points, 4)
        assert dirs.shape == (1, 3)
        assert abs(dirs[0][2]) == pytest.approx(1.0)

    def test_three_points_need_four_domains(self):
        points = np.eye(3)
        assert guideline_directions([0.0, 0.0, 0.0], points, 3).shape == (0, 3)

    def test_four_points_give_nothing(self):
        points = [[1.0, 0.0, 0.0], [0.0, 1.0, 0.0],
                  [0.0, 0.0, 1.0], [-1.0, 0.0, 0.0]]
        assert guideline_directions([0.0, 0.0, 0.0], points, 4).shape == (0, 3)


# -- Atom helpers -------------------------------------------------------------

class TestAtomHelpers:
    def test_hard_points_are_unit_directions(self, ethane_fragment):
        _, c1, c2, c3 = ethane_fragment
        points = hard_points(c1)
        assert points.shape == (2, 3)
        np.testing.assert_allclose(points[0], [1.0, 0.0, 0.0])
        _assert_unit_rows(points)

    def test_hard_points_of_isolated_atom(self, structure):
        atom = structure.add_atom("C", [0.0, 0.0, 0.0])
        assert hard_points(atom).shape == (0, 3)

    def test_double_bond_reduces_steric_number(self, structure):
        a = structure.add_atom("C", [0.0, 0.0, 0.0])
        b = structure.add_atom("C", [0.13, 0.0, 0.0])
        structure.add_bond(a, b, 2)
        assert effective_steric_number(a) == 3
        assert empty_bond_capacity(a) == 2

    def test_triple_bond_gives_linear(self, structure):
        a = structure.add_atom("C", [0.0, 0.0, 0.0])
        b = structure.add_atom("C", [0.12, 0.0, 0.0])
        structure.add_bond(a, b, 3)
        assert effective_steric_number(a) == 2
        (guideline,) = calculate_guidelines([a], "H")
        np.testing.assert_allclose(guideline.directions, [[-1.0, 0.0, 0.0]])

    def test_alkene_carbon_is_trigonal(self, structure):
        a = structure.add_atom("C", [0.0, 0.0, 0.0])
        b = structure.add_atom("C", [0.13, 0.0, 0.0])
        structure.add_bond(a, b, 2)
        (guideline,) = calculate_guidelines([a], "H", pose=[0.0, 1.0, 0.0])
        assert len(guideline) == 2
        for d in guideline.directions:
            assert angle_between(d, [1.0, 0.0, 0.0]) == pytest.approx(120.0)


# -- calculate_guidelines -----------------------------------------------------

class TestCalculateGuidelines:
    def test_positions_at_ideal_length(self, structure):
        c = structure.add_atom("C", [0.1, 0.2, 0.3])
        (guideline,) = calculate_guidelines([c], "H")
        assert len(guideline) == 4
        offsets = guideline.positions - c.position
        np.testing.assert_allclose(np.linalg.norm(offsets, axis=1), 0.11)
        np.testing.assert_allclose(offsets / 0.11, guideline.directions)

    def test_one_guideline_per_core(self, ethane_fragment):
        structure, c1, c2, c3 = ethane_fragment
        guidelines = calculate_guidelines([c2, c1, c3], "C", structure=structure)
        assert [g.core for g in guidelines] == [c2, c1, c3]
        assert len(guidelines[1]) == 2
        assert len(guidelines[0]) == 3

    def test_empty_cores(self):
        assert calculate_guidelines([], "C") == []

    def test_foreign_core_raises(self, structure):
        stranger = MolecularStructure().add_atom("C", [0.0, 0.0, 0.0])
        with pytest.raises(ValueError, match="not part of the structure"):
            calculate_guidelines([stranger], "H", structure=structure)

    def test_removed_core_raises(self, ethane_fragment):
        structure, c1, *_ = ethane_fragment
        structure.remove_atom(c1)
        with pytest.raises(ValueError, match="not part of the structure"):
            calculate_guidelines([c1], "H")

    def test_does_not_mutate(self, ethane_fragment):
        structure, c1, c2, c3 = ethane_fragment
        before = structure.positions.copy()
        calculate_guidelines([c1, c2, c3], "H", pose=[1.0, 1.0, 1.0])
        np.testing.assert_array_equal(structure.positions, before)
        assert len(structure.bonds) == 2


class TestGuideline:
    def test_valid_tracks_capacity(self, structure):
        h = structure.add_atom("H", [0.0, 0.0, 0.0])
        c = structure.add_atom("C", [0.11, 0.0, 0.0])
        (guideline,) = calculate_guidelines([c], "H")
        assert guideline.valid
        structure.add_bond(h, c, 3)
        assert c.empty_bond_capacity == 1
        assert guideline.valid
        other = structure.add_atom("H", [-0.11, 0.0, 0.0])
        structure.add_bond(other, c)
        assert not guideline.valid

    def test_nearest(self, structure):
        c = structure.add_atom("C", [0.0, 0.0, 0.0])
        (guideline,) = calculate_guidelines([c], "H")
        np.testing.assert_allclose(
            guideline.nearest([0.0, 1.0, 0.0]), [0.0, 0.11, 0.0],
        )

    def test_nearest_of_empty_guideline(self, structure):
        c = structure.add_atom("C", [0.0, 0.0, 0.0])
        guideline = Guideline(c, np.zeros((0, 3)), np.zeros((0, 3)))
        assert guideline.nearest([0.0, 0.0, 0.0]) is None
