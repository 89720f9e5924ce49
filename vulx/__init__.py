"""vulx - workspace orchestrator for Vulmix frontend builds."""

__version__ = "0.1.0"
