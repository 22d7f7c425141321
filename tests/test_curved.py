"""Curved (helical) staircase generator."""
import math

import numpy as np
import pytest

from stairs3d import (
    CurvedStairParameters,
    DegenerateGeometry,
    InvalidParameter,
    NumSteps,
    build_curved_geometry,
    generate_curved_stairs,
)


def _geometry(**overrides):
    return build_curved_geometry(CurvedStairParameters(**overrides))


def _axis_x(inner_radius=3.0, step_width=1.0, ccw=False):
    mid = inner_radius + step_width / 2.0
    return -mid if ccw else mid


def _radius(vertex, axis_x):
    return math.hypot(vertex[0] - axis_x, vertex[2])


class TestWithoutSides:

    def test_single_step_scenario(self):
        geometry = _geometry(step_type=NumSteps(1), curvature=90.0, inner_radius=3.0, step_width=1.0, sides=False)
        assert len(geometry.vertices) == 6
        assert len(geometry.faces) == 2
        tread = geometry.faces[1]
        radii = sorted(_radius(geometry.vertices[vid], _axis_x()) for vid in tread)
        assert radii == pytest.approx([3.0, 3.0, 4.0, 4.0], abs=1e-9)

    @pytest.mark.parametrize("num_steps", [1, 2, 6, 9])
    def test_counts(self, num_steps):
        geometry = _geometry(step_type=NumSteps(num_steps), sides=False)
        assert len(geometry.vertices) == 4 * num_steps + 2
        assert len(geometry.faces) == 2 * num_steps

    def test_first_riser_centred_on_origin(self):
        geometry = _geometry(sides=False)
        riser = [geometry.vertices[vid] for vid in geometry.faces[0]]
        xs = sorted(round(v[0], 9) for v in riser)
        assert xs == [-0.5, -0.5, 0.5, 0.5]
        assert all(v[2] == 0.0 for v in riser)

    def test_treads_are_horizontal(self):
        geometry = _geometry(step_type=NumSteps(4), sides=False)
        for face in geometry.faces[1::2]:
            ys = {geometry.vertices[vid][1] for vid in face}
            assert len(ys) == 1

    @pytest.mark.parametrize("curvature, num_steps", [(60.0, 6), (90.0, 1), (200.0, 4), (45.0, 7)])
    def test_total_sweep_matches_curvature(self, curvature, num_steps):
        geometry = _geometry(curvature=curvature, step_type=NumSteps(num_steps), sides=False)
        axis = np.array([_axis_x(), 0.0])
        total = 0.0
        for face in geometry.faces[1::2]:
            start = np.array(geometry.vertices[face[0]])[[0, 2]] - axis
            end = np.array(geometry.vertices[face[3]])[[0, 2]] - axis
            cos = np.dot(start, end) / (np.linalg.norm(start) * np.linalg.norm(end))
            total += math.acos(max(-1.0, min(1.0, cos)))
        assert math.degrees(total) == pytest.approx(curvature, abs=1e-6)

    def test_tread_uvs_unwrap_into_a_strip(self):
        geometry = _geometry(height=2.0, step_type=NumSteps(2), sides=False)
        delta_angle = math.radians(60.0) / 2
        step_depth = delta_angle * 3.5 / 2
        starts = [uv[0][1] for uv in geometry.uvs]
        expected = [0.0, 1.0, 1.0 + step_depth, 2.0 + step_depth]
        assert starts == pytest.approx(expected)
        assert geometry.uvs[1][2] == pytest.approx((1.0, 1.0 + step_depth))


class TestWithSides:

    @pytest.mark.parametrize("num_steps", [1, 2, 3, 6])
    @pytest.mark.parametrize("ccw", [False, True])
    def test_watertight(self, num_steps, ccw):
        mesh = generate_curved_stairs(num_steps=num_steps, ccw=ccw)
        assert mesh.is_watertight()

    @pytest.mark.parametrize("curvature", [30.0, 180.0, 300.0])
    def test_watertight_over_wide_sweeps(self, curvature):
        mesh = generate_curved_stairs(curvature=curvature, num_steps=8)
        assert mesh.is_watertight()

    @pytest.mark.parametrize("ccw", [False, True])
    def test_normals_point_outward(self, ccw):
        mesh = generate_curved_stairs(ccw=ccw)
        assert mesh.signed_volume() > 0.0

    def test_counts(self, curved_geometry):
        n = 6
        assert len(curved_geometry.vertices) == 4 * n + 2 + 2 * n
        # stairs, side triangles, slats (start pair included), bottom strip, back
        assert len(curved_geometry.faces) == 2 * n + 2 * n + 2 * n + n + 1

    def test_ground_ring_on_floor(self, curved_geometry):
        ground = curved_geometry.vertices[4 * 6 + 2:]
        assert len(ground) == 12
        assert all(v[1] == 0.0 for v in ground)
        radii = sorted(round(_radius(v, _axis_x()), 9) for v in ground)
        assert radii == [3.0] * 6 + [4.0] * 6

    def test_back_uvs_are_unit_square(self, curved_geometry):
        assert curved_geometry.uvs[-1] == ((0.0, 1.0), (1.0, 1.0), (1.0, 0.0), (0.0, 0.0))

    def test_side_uvs_use_sweep_position_and_z(self):
        geometry = _geometry(step_type=NumSteps(3))
        layout = geometry.step_layout
        step_depth = math.radians(60.0) / 3 * 3.5 / 3
        side_triangles = [(face, uv) for face, uv in zip(geometry.faces, geometry.uvs) if len(face) == 3]
        # two side triangles per step plus the start pair
        assert len(side_triangles) == 2 * layout.num_steps + 2
        for face, uv in side_triangles:
            for vid, (u, v) in zip(face, uv):
                assert v == geometry.vertices[vid][2]
                assert u / step_depth == pytest.approx(round(u / step_depth))

    def test_outer_wall_uvs_follow_outer_vertices(self):
        """The outer wall maps its own z, so its v range reaches the outer radius."""
        geometry = _geometry(step_type=NumSteps(3))
        outer_wall = [
            (face, uv) for face, uv in zip(geometry.faces, geometry.uvs)
            if all(abs(_radius(geometry.vertices[vid], _axis_x()) - 4.0) < 1e-9 for vid in face)
        ]
        # a side triangle and a slat per step
        assert len(outer_wall) == 6
        for face, uv in outer_wall:
            assert [v for _, v in uv] == [geometry.vertices[vid][2] for vid in face]
        top_v = max(v for _, uv in outer_wall for _, v in uv)
        assert top_v == pytest.approx(4.0 * math.sin(math.radians(60.0)))


class TestDirection:

    @pytest.mark.parametrize("sides", [False, True])
    def test_ccw_mirrors_x(self, sides):
        cw = np.array(_geometry(ccw=False, sides=sides).vertices)
        ccw = np.array(_geometry(ccw=True, sides=sides).vertices)
        np.testing.assert_allclose(ccw[:, 0], -cw[:, 0], atol=1e-12)
        np.testing.assert_array_equal(ccw[:, 1:], cw[:, 1:])

    def test_ccw_buffer_mirrors_x(self):
        cw = generate_curved_stairs(ccw=False).positions.astype(np.float64)
        ccw = generate_curved_stairs(ccw=True).positions.astype(np.float64)
        mirrored = cw * np.array([-1.0, 1.0, 1.0])

        def ordered(points):
            return points[np.lexsort(np.round(points, 5).T)]

        np.testing.assert_allclose(ordered(ccw), ordered(mirrored), atol=1e-5)

    def test_ccw_reverses_face_order(self):
        cw = _geometry(ccw=False)
        ccw = _geometry(ccw=True)
        assert all(a == b[::-1] for a, b in zip(cw.faces, ccw.faces))
        assert all(a == b[::-1] for a, b in zip(cw.uvs, ccw.uvs))


class TestProperties:

    def test_defaults(self):
        mesh = generate_curved_stairs()
        assert mesh.step_layout.num_steps == 6
        assert mesh.is_watertight()

    def test_index_bounds_and_unit_normals(self):
        mesh = generate_curved_stairs(num_steps=5, curvature=120.0)
        assert int(mesh.indices.max()) < mesh.vertex_count
        assert len(mesh.indices) % 3 == 0
        np.testing.assert_allclose(np.linalg.norm(mesh.normals, axis=1), 1.0, atol=1e-6)

    def test_step_height_mode(self):
        mesh = generate_curved_stairs(height=2.0, step_type="step_height", user_step_height=0.3)
        assert mesh.step_layout.num_steps == 6
        assert float(mesh.positions[:, 1].max()) == pytest.approx(1.8, rel=1e-6)

    def test_idempotent(self):
        first = generate_curved_stairs(curvature=75.0, ccw=True)
        second = generate_curved_stairs(curvature=75.0, ccw=True)
        for name in ("positions", "normals", "uvs", "indices"):
            np.testing.assert_array_equal(getattr(first, name), getattr(second, name))


class TestValidation:

    @pytest.mark.parametrize("name", ["height", "step_width", "inner_radius"])
    @pytest.mark.parametrize("value", [0.0, -2.0])
    def test_non_positive_dimension(self, name, value):
        with pytest.raises(InvalidParameter, match=name):
            generate_curved_stairs(**{name: value})

    @pytest.mark.parametrize("curvature", [-10.0, float("nan"), "60"])
    def test_invalid_curvature(self, curvature):
        with pytest.raises(InvalidParameter, match="curvature"):
            generate_curved_stairs(curvature=curvature)

    @pytest.mark.parametrize("curvature", [0.0, math.inf])
    def test_degenerate_curvature(self, curvature):
        with pytest.raises(DegenerateGeometry, match="delta_angle"):
            generate_curved_stairs(curvature=curvature)

    def test_whole_turn_per_step(self):
        with pytest.raises(DegenerateGeometry):
            generate_curved_stairs(curvature=360.0, num_steps=1)

    def test_zero_steps(self):
        with pytest.raises(InvalidParameter, match="num_steps"):
            generate_curved_stairs(num_steps=0)

    @pytest.mark.parametrize("curvature", [180.0, 270.0])
    def test_half_turn_per_step(self, curvature):
        with pytest.raises(DegenerateGeometry, match="delta_angle"):
            generate_curved_stairs(curvature=curvature, num_steps=1)

    def test_half_turn_split_over_steps_is_accepted(self):
        mesh = generate_curved_stairs(curvature=270.0, num_steps=2)
        assert mesh.signed_volume() > 0.0

    @pytest.mark.parametrize("curvature, num_steps", [(360.0, 8), (400.0, 8), (720.0, 8)])
    def test_closed_sweep_must_stay_within_one_turn(self, curvature, num_steps):
        with pytest.raises(InvalidParameter, match="curvature"):
            generate_curved_stairs(curvature=curvature, num_steps=num_steps)

    def test_open_helix_may_exceed_one_turn(self):
        mesh = generate_curved_stairs(curvature=720.0, num_steps=8, sides=False)
        assert mesh.triangle_count == 2 * 2 * 8

    @pytest.mark.parametrize("name", ["step_width", "inner_radius"])
    def test_infinite_dimension(self, name):
        with pytest.raises(DegenerateGeometry, match=name):
            generate_curved_stairs(**{name: math.inf})
