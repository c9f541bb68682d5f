"""Core flowgen functionality: catalog access, flow generation, configuration."""
