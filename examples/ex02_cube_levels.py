"""
ex02_cube_levels.py
-------------------
Goal: Refine a closed cube several times. Each level rebuilds the topology
from the previous level's flat output, as the subdivision step only ever
does one iteration per call.
"""
from snapcore.display import Display
from snapsubd import TopologyError, catmull_clark
from snapsubd.primitives import cube


def run(levels=3):
    mesh = cube()

    display = Display("Cube Refinement", f"{mesh.num_vertices} verts | {mesh.num_quads} quads")
    display.header()
    display.section("Refinement")
    display.setup_mesh_columns()
    display.log_mesh(0, mesh)

    for level in range(1, levels + 1):
        try:
            mesh = catmull_clark(mesh)
        except TopologyError as exc:
            display.error(str(exc))
            return None
        display.log_mesh(level, mesh)

    display.success()
    return mesh


if __name__ == "__main__":
    run()
