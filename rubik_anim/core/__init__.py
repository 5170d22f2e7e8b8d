from rubik_anim.core.cube_state import Cubie, CubeState, SliceAnimation

__all__ = ["Cubie", "CubeState", "SliceAnimation"]
