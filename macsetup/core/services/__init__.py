"""Core services — detection, installation, probes and actions."""
