"""
snapsubd/quality.py
-------------------
Tools for inspecting the connectivity and shape of a triangle/quad mesh.
Reports valence, edge manifoldness, face area and aspect ratio.
"""
import numpy as np
import matplotlib.pyplot as plt

from .mesh import build_topology


class MeshQuality:
    """
    Inspector class for a FlatMesh.

    Usage:
        inspector = MeshQuality(mesh)
        inspector.analyze()
        inspector.print_report()
        inspector.plot_histograms()
    """
    def __init__(self, mesh):
        self.mesh = mesh
        self.graph = None

        # Metric Storage
        self.valences = np.zeros(0, dtype=int)
        self.edge_face_counts = np.zeros(0, dtype=int)
        self.areas = np.zeros(0)
        self.aspect_ratios = np.zeros(0)

        self._analyzed = False

    def analyze(self):
        """
        Builds the topology graph and computes per-vertex, per-edge and
        per-face metrics.
        """
        self.graph = build_topology(self.mesh)
        g = self.graph

        self.valences = np.array([v.valence for v in g.vertices], dtype=int)
        self.edge_face_counts = np.array([e.face_count for e in g.edges], dtype=int)

        positions = g.positions()
        areas = []
        aspect_ratios = []
        for face in g.faces:
            area, ar = self._compute_single_face(positions[list(face.vertices)])
            areas.append(area)
            aspect_ratios.append(ar)

        self.areas = np.array(areas)
        self.aspect_ratios = np.array(aspect_ratios)

        self._analyzed = True
        return self

    def _compute_single_face(self, corners):
        """ Helper: Returns (area, aspect_ratio) for one triangle or quad. """
        # Area: fan of triangles from corner 0 (a quad splits into two)
        area = 0.0
        for k in range(1, len(corners) - 1):
            cross = np.cross(corners[k] - corners[0], corners[k + 1] - corners[0])
            area += 0.5 * np.linalg.norm(cross)

        # Aspect Ratio: longest / shortest edge
        lengths = np.linalg.norm(np.roll(corners, -1, axis=0) - corners, axis=1)
        shortest = lengths.min()
        if shortest > 1e-15:
            ar = lengths.max() / shortest
        else:
            ar = 999.0  # Degenerate

        return area, ar

    @property
    def num_boundary_edges(self):
        if not self._analyzed: self.analyze()
        return int(np.count_nonzero(self.edge_face_counts == 1))

    @property
    def euler_characteristic(self):
        """ V - E + F of the topology graph (2 for a closed sphere-like mesh). """
        if not self._analyzed: self.analyze()
        g = self.graph
        return g.num_vertices - g.num_edges + g.num_faces

    @property
    def is_closed(self):
        if not self._analyzed: self.analyze()
        return len(self.edge_face_counts) > 0 and bool(np.all(self.edge_face_counts == 2))

    def print_report(self):
        """ Prints a summary to stdout. """
        if not self._analyzed: self.analyze()

        g = self.graph
        print(f"--- Mesh Quality Report ({g.num_faces} Faces) ---")
        print(f"Topology: V = {g.num_vertices}, E = {g.num_edges}, F = {g.num_faces}, "
              f"Euler = {self.euler_characteristic}")
        print(f"Shapes:   {self.mesh.num_quads} quads, {self.mesh.num_triangles} triangles")

        print(f"Boundary Edges: {self.num_boundary_edges}  ", end="")
        if self.is_closed: print("[OK] Closed")
        else: print("[~] Open")

        if g.num_faces == 0:
            return

        print(f"Valence: min {self.valences.min()}, max {self.valences.max()}")
        print(f"Area:")
        print(f"  Min: {self.areas.min():.2e}")
        print(f"  Max: {self.areas.max():.2e}")

        max_ar = self.aspect_ratios.max()
        print(f"Max Aspect Ratio: {max_ar:.2f}  ", end="")
        if max_ar > 10.0: print("[!] WARNING: Highly Stretched")
        elif max_ar > 3.0: print("[~] CAUTION")
        else: print("[OK]")

    def plot_histograms(self, show=True):
        """ Visualizes the distribution of quality metrics. Returns the figure. """
        if not self._analyzed: self.analyze()

        fig, ax = plt.subplots(1, 3, figsize=(15, 4))

        def safe_hist(axis, data, color, title, xlabel, limit_line=None):
            if len(data) == 0: return

            # Identical values break automatic binning; pad a manual range
            dmin, dmax = data.min(), data.max()
            if np.isclose(dmin, dmax):
                padding = max(1e-6, abs(dmin)*0.1)
                bins = np.linspace(dmin - padding, dmax + padding, 10)
                axis.hist(data, bins=bins, color=color, edgecolor='black')
            else:
                axis.hist(data, bins=20, color=color, edgecolor='black')

            axis.set_title(title)
            axis.set_xlabel(xlabel)
            if limit_line:
                axis.axvline(limit_line, color='red', linestyle='--', label='Limit')
                axis.legend()

        # 1. Valence
        safe_hist(ax[0], self.valences.astype(float), 'skyblue',
                  "Vertex Valence", "Incident Faces")

        # 2. Aspect Ratio
        safe_hist(ax[1], self.aspect_ratios, 'lightgreen',
                  "Aspect Ratio (Target < 3.0)", "Longest / Shortest Edge", limit_line=3.0)

        # 3. Area
        safe_hist(ax[2], self.areas, 'salmon',
                  "Face Areas", "Area")

        plt.tight_layout()
        if show:
            plt.show()
        return fig
