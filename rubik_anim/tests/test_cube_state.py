import math
import random
import unittest

from rubik_anim.config import CubeConfig
from rubik_anim.core import CubeState
from rubik_anim.core.colors import COLORS, INNER
from rubik_anim.core.geometry import AXES, LAYERS, all_positions


class FakeClock:
    """Reloj manual en milisegundos."""

    def __init__(self, t: float = 1000.0) -> None:
        self.t = t

    def __call__(self) -> float:
        return self.t


def settle(state: CubeState, clock: FakeClock) -> None:
    clock.t += state.config.animation_duration
    state.tick(clock.t)


class TestCubeState(unittest.TestCase):
    def setUp(self):
        self.clock = FakeClock()
        self.state = CubeState(clock=self.clock)

    def test_starts_solved(self):
        self.assertTrue(self.state.is_solved())
        self.assertFalse(self.state.is_animating)
        self.assertEqual(len(self.state.snapshot()), 27)
        self.state.audit()

    def test_right_face_clockwise(self):
        ok = self.state.rotate_slice("x", 1, True)
        self.assertTrue(ok)
        self.assertTrue(self.state.is_animating)

        snap = self.state.snapshot()
        moved = [c for c in snap.values() if c.animation is not None]
        self.assertEqual(len(moved), 9)
        self.assertTrue(all(c.home[0] == 1 for c in moved))
        self.assertTrue(all(c.position[0] == 1 for c in moved))

        corner = snap[(1, 1, 1)]
        self.assertEqual(corner.position, (1, 1, -1))
        self.assertEqual(
            corner.face_colors,
            (COLORS["right"], INNER, COLORS["front"], INNER, INNER, COLORS["top"]),
        )
        # La orientación visual sigue siendo la anterior hasta el primer tick
        self.assertEqual(corner.orientation, (0.0, 0.0, 0.0))
        self.assertEqual(corner.animation.start_rotation, (0.0, 0.0, 0.0))
        self.assertEqual(corner.animation.target_rotation, (-math.pi / 2, 0.0, 0.0))
        self.assertEqual(corner.animation.start_time, self.clock.t)
        self.assertEqual(corner.animation.duration, 500.0)
        self.assertEqual(corner.animation.axis, "x")

        settle(self.state, self.clock)
        self.state.audit()

    def test_every_layer_has_nine_cubies(self):
        for axis in AXES:
            for layer in LAYERS:
                state = CubeState(clock=self.clock)
                state.rotate_slice(axis, layer, True)
                n = sum(1 for c in state.snapshot().values() if c.animation is not None)
                self.assertEqual(n, 9, (axis, layer))

    def test_second_move_dropped_while_animating(self):
        self.assertTrue(self.state.rotate_slice("y", 0, False))
        before = dict(self.state.snapshot())

        self.assertFalse(self.state.rotate_slice("x", 0, True))
        self.assertEqual(dict(self.state.snapshot()), before)

        axes = {c.animation.axis for c in self.state.snapshot().values() if c.animation}
        self.assertEqual(axes, {"y"})

    def test_move_accepted_after_settling(self):
        self.state.rotate_slice("y", 0, False)
        settle(self.state, self.clock)
        self.assertFalse(self.state.is_animating)
        self.assertTrue(self.state.rotate_slice("x", 0, True))

    def test_interpolation_midway(self):
        self.state.rotate_slice("x", 1, True)
        self.state.tick(self.clock.t + 250.0)

        corner = self.state.snapshot()[(1, 1, 1)]
        self.assertAlmostEqual(corner.orientation[0], -math.pi / 4)
        self.assertIsNotNone(corner.animation)
        self.assertTrue(self.state.is_animating)

    def test_tick_before_start_clamps_to_zero(self):
        self.state.rotate_slice("z", -1, False)
        self.state.tick(self.clock.t - 100.0)
        c = self.state.snapshot()[(0, 0, -1)]
        self.assertEqual(c.orientation, (0.0, 0.0, 0.0))
        self.assertTrue(self.state.is_animating)

    def test_settling_snaps_to_target(self):
        self.state.rotate_slice("x", 1, True)
        for dt in (17.0, 160.0, 333.0):
            self.state.tick(self.clock.t + dt)
        self.state.tick(self.clock.t + 10_000.0)

        self.assertFalse(self.state.is_animating)
        for c in self.state.snapshot().values():
            self.assertIsNone(c.animation)
            if c.home[0] == 1:
                self.assertEqual(c.orientation, (-math.pi / 2, 0.0, 0.0))
            else:
                self.assertEqual(c.orientation, (0.0, 0.0, 0.0))

    def test_orientation_accumulates(self):
        for _ in range(2):
            self.state.rotate_slice("x", 1, True)
            settle(self.state, self.clock)
        self.state.rotate_slice("x", 1, False)
        settle(self.state, self.clock)

        c = self.state.snapshot()[(1, 1, 1)]
        self.assertAlmostEqual(c.orientation[0], -math.pi / 2)

    def test_four_front_turns_are_identity(self):
        start = dict(self.state.snapshot())
        for _ in range(4):
            self.assertTrue(self.state.rotate_slice("z", 1, True))
            settle(self.state, self.clock)

        for key, c in self.state.snapshot().items():
            self.assertEqual(c.position, start[key].position)
            self.assertEqual(c.face_colors, start[key].face_colors)
        self.assertTrue(self.state.is_solved())

    def test_positions_stay_a_bijection(self):
        rng = random.Random(7)
        for _ in range(60):
            axis = rng.choice(AXES)
            layer = rng.choice(LAYERS)
            cw = rng.choice((True, False))
            self.state.rotate_slice(axis, layer, cw)
            settle(self.state, self.clock)
            self.assertEqual(
                sorted(self.state.positions().values()), sorted(all_positions())
            )
            self.state.audit()

    def test_move_and_inverse_restore_solved(self):
        self.state.rotate_slice("y", 1, True)
        settle(self.state, self.clock)
        self.assertFalse(self.state.is_solved())

        self.state.rotate_slice("y", 1, False)
        settle(self.state, self.clock)
        self.assertTrue(self.state.is_solved())

    def test_cubie_at(self):
        self.state.rotate_slice("x", 1, True)
        self.assertEqual(self.state.cubie_at((1, 1, -1)).home, (1, 1, 1))
        with self.assertRaises(KeyError):
            self.state.cubie_at((2, 0, 0))

    def test_snapshot_is_read_only_and_stable(self):
        snap = self.state.snapshot()
        with self.assertRaises(TypeError):
            snap[(0, 0, 0)] = None  # type: ignore[index]

        self.state.rotate_slice("x", 1, True)
        self.assertEqual(snap[(1, 1, 1)].position, (1, 1, 1))
        self.assertEqual(self.state.snapshot()[(1, 1, 1)].position, (1, 1, -1))

    def test_listeners(self):
        calls = []
        self.state.add_listener(lambda: calls.append(self.state.is_animating))

        self.state.tick(self.clock.t)  # nada que animar
        self.assertEqual(calls, [])

        self.state.rotate_slice("x", 0, True)
        self.assertEqual(calls, [True])

        self.state.tick(self.clock.t + 100.0)
        self.assertEqual(calls, [True, True])

        settle(self.state, self.clock)
        self.assertEqual(calls, [True, True, False])

        self.state.tick(self.clock.t + 1000.0)
        self.assertEqual(len(calls), 3)

        self.state.rotate_slice("y", 0, True)
        self.state.rotate_slice("z", 0, True)  # descartado, no notifica
        self.assertEqual(len(calls), 4)

    def test_reset(self):
        self.state.rotate_slice("x", 1, True)
        self.assertFalse(self.state.reset())
        settle(self.state, self.clock)

        self.assertTrue(self.state.reset())
        self.assertTrue(self.state.is_solved())
        for key, c in self.state.snapshot().items():
            self.assertEqual(c.position, key)
            self.assertEqual(c.orientation, (0.0, 0.0, 0.0))

    def test_view_rotation(self):
        self.assertEqual((self.state.rotation_x, self.state.rotation_y), (0.5, 0.5))
        self.state.rotate_left()
        self.assertEqual(self.state.rotation_y, 0.0)
        self.state.rotate_right()
        self.state.rotate_right()
        self.assertEqual(self.state.rotation_y, 1.0)
        self.state.rotate_up()
        self.assertEqual(self.state.rotation_x, 0.0)
        self.state.rotate_down()
        self.state.rotate_down()
        self.assertEqual(self.state.rotation_x, 1.0)

        self.state.rotate_slice("x", 1, True)
        self.state.reset_view()  # la vista no depende de la animación
        self.assertEqual((self.state.rotation_x, self.state.rotation_y), (0.5, 0.5))

    def test_custom_config(self):
        state = CubeState(CubeConfig(animation_duration=100.0), clock=self.clock)
        state.rotate_slice("x", 1, True)
        state.tick(self.clock.t + 100.0)
        self.assertFalse(state.is_animating)

    def test_invalid_config(self):
        with self.assertRaises(ValueError):
            CubeConfig(animation_duration=0)
        with self.assertRaises(ValueError):
            CubeConfig(frame_interval_ms=-1)

    def test_out_of_domain_move(self):
        with self.assertRaises(ValueError):
            self.state.rotate_slice("w", 1, True)  # type: ignore[arg-type]
        with self.assertRaises(ValueError):
            self.state.rotate_slice("x", 2, True)
        self.assertFalse(self.state.is_animating)

    def test_audit_detects_broken_colors(self):
        from dataclasses import replace

        broken = dict(self.state.snapshot())
        c = broken[(1, 1, 1)]
        broken[(1, 1, 1)] = replace(c, face_colors=(INNER,) * 6)
        self.state._cubies = broken
        with self.assertRaises(AssertionError):
            self.state.audit()


if __name__ == "__main__":
    unittest.main()
