"""
ex01_unit_quad.py
-----------------
Goal: Subdivide a single quad once and look at what comes out.
A lone quad is all boundary: edge points are midpoints and every corner
(valence 1) is reflected through the face point.
"""
import matplotlib.pyplot as plt

from snapsubd import build_topology, subdivide, weld_vertices
from snapsubd.primitives import unit_quad


def run():
    mesh = unit_quad()

    print("--- 1. Topology ---")
    graph = build_topology(mesh)
    print(graph)
    for v in graph.vertices:
        print(f"  {v}")
    for e in graph.edges:
        print(f"  {e}")

    print("\n--- 2. Subdivide Once ---")
    refined = subdivide(graph)
    print(refined)

    welded, _ = weld_vertices(refined)
    print(f"Distinct positions after welding: {welded.num_vertices}")

    # --- VISUALIZATION ---
    fig, ax = plt.subplots(figsize=(6, 6))
    ax.set_aspect('equal')
    for q in refined.faces:
        xs = [refined.positions[i, 0] for i in q] + [refined.positions[q[0], 0]]
        ys = [refined.positions[i, 1] for i in q] + [refined.positions[q[0], 1]]
        ax.plot(xs, ys, 'k-', lw=0.8)
    ax.set_title("Unit quad after one Catmull-Clark step")
    plt.show()


if __name__ == "__main__":
    run()
