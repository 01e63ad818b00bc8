"""
ex03_quality_check.py
---------------------
Goal: Inspect a mixed triangle/quad prism before and after subdivision.
"""
from snapsubd import catmull_clark
from snapsubd.primitives import triangular_prism
from snapsubd.quality import MeshQuality


def run():
    mesh = triangular_prism()

    print("1. Input Prism")
    MeshQuality(mesh).print_report()

    print("\n2. After One Step")
    inspector = MeshQuality(catmull_clark(mesh))
    inspector.analyze()
    inspector.print_report()

    print("3. Plotting...")
    inspector.plot_histograms()


if __name__ == "__main__":
    run()
