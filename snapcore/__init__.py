''' snapcore: Shared console utilities for SnapSubD scripts.

Versioning follows Major.Minor.Patch:

    Major: public API changed, old scripts may not run.

    Minor: new feature, old scripts still work.

    Patch: bug fix.
'''
__version__ = "0.1.0"

from .display import SubdivisionDisplay, Display
