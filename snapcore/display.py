"""
snapcore/display.py
-------------------
Standardized console output for SnapSubD runs.
Provides a header, section breaks and a per-level table of mesh counts.
"""
import time
import numpy as np


class SubdivisionDisplay:
    def __init__(self, title, context_info):
        """
        Initialize the display manager.

        Args:
            title (str): Name of the run (e.g. "Cube x3")
            context_info (str): Input description (e.g. "8 verts | 6 quads")
        """
        self.title = title
        self.context = context_info
        self.start_time = time.time()
        self._col_widths = []
        self._headers = []

    def header(self):
        width = 70
        print("-" * width)
        print(f"SnapSubD :: {self.title}")
        print(f"Input    :: {self.context}")
        print("-" * width + "\n")

    def section(self, name):
        """Prints a visual break for a new phase (e.g. 'Refinement')."""
        print(f"--- {name} ---")

    def setup_stats_columns(self, headers, widths=None):
        """
        Defines the columns of the stats table and prints its header row.

        Args:
            headers (list of str): Column names, e.g. ["Level", "Verts", "Quads"]
            widths (list of int, optional): Width of each column. Defaults to 10.
        """
        self._headers = list(headers)
        if widths is None:
            self._col_widths = [10] * len(self._headers)
        else:
            self._col_widths = list(widths)

        print("")
        header_str = "  ".join([h.rjust(w) for h, w in zip(self._headers, self._col_widths)])
        print(header_str)
        print("-" * len(header_str))

    def setup_mesh_columns(self):
        """Column layout used by log_mesh()."""
        self.setup_stats_columns(["Level", "Verts", "Faces", "Quads", "Tris"])

    def log_stats(self, *args):
        """
        Logs a row of data matching the columns defined in setup_stats_columns.
        Floats switch to scientific notation when very small or very large.
        """
        if len(args) != len(self._col_widths):
            raise ValueError(f"Expected {len(self._col_widths)} values, got {len(args)}: {args}")

        row_str = [self._format_cell(val, width) for val, width in zip(args, self._col_widths)]
        print("  ".join(row_str))

    def log_mesh(self, level, mesh):
        """Logs one row of counts for a FlatMesh at refinement `level`."""
        self.log_stats(level, mesh.num_vertices, mesh.num_faces,
                       mesh.num_quads, mesh.num_triangles)

    @staticmethod
    def _format_cell(val, width):
        if isinstance(val, (int, np.integer)):
            return f"{int(val):d}".rjust(width)
        if isinstance(val, (float, np.floating)):
            abs_val = abs(val)
            if abs_val == 0:
                return f"{0.0:.4f}".rjust(width)
            if abs_val < 1e-2 or abs_val >= 1e5:
                return f"{val:.2e}".rjust(width)
            return f"{val:.4f}".rjust(width)
        return str(val).rjust(width)

    def success(self, message="Subdivision Complete"):
        """Prints the success footer with elapsed time."""
        elapsed = time.time() - self.start_time
        print(f"\n>> {message} ({elapsed:.2f}s)\n")

    def error(self, message):
        """Prints a critical error message."""
        print(f"\n!! TOPOLOGY ERROR: {message} !!\n")


Display = SubdivisionDisplay
