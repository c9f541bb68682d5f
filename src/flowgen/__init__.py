"""
flowgen - Trigger flow generator for Integration App workspaces.

A CLI tool that walks the workspace's integrations, data collections and
collection events, and generates one forwarding flow per event.
"""

__version__ = "0.1.0"

# Re-export core models for convenience
from flowgen.core.flows.models import CollectionDescriptor, FlowDocument, Integration

__all__ = ["CollectionDescriptor", "FlowDocument", "Integration", "__version__"]
