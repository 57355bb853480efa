"""AOS CLI Helper — command completion and highlighting for OmniSwitch AOS R8."""

__version__ = "0.1.0"
