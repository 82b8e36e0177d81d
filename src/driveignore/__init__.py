"""driveignore: check that a folder was fully mirrored into a sync target."""

__version__ = "1.0.0"
