"""macsetup — personal machine provisioning checklist."""

__version__ = "0.1.0"
