"""
Local storage for generated flow documents.

Flow documents are written as YAML under
``<output-root>/flows/<integrationKey>/<flowKey>.yaml``. The files are an
artifact of the run for inspection and version control; they are never
read back.

Example:
    # Default store under ./dist
    store = FlowStore.default()
    path = store.write(document, integration_key="hubspot")
"""

import tempfile
from pathlib import Path

import yaml

from flowgen.core.catalog.exceptions import StoreError
from flowgen.core.flows.models import FlowDocument

FLOW_FILE_SUFFIX = ".yaml"


def render_flow_yaml(document: FlowDocument) -> str:
    """
    Serialize a flow document to YAML.

    Block style with insertion order preserved, so identical documents
    always render to identical text.
    """
    return yaml.safe_dump(
        document.to_payload(),
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )


class FlowStore:
    """
    Storage layer for flow document files.

    Uses atomic writes (temp file, then rename) and unconditionally
    replaces any previous file for the same flow key.
    """

    def __init__(self, output_root: Path) -> None:
        """
        Initialize store with an output root.

        Args:
            output_root: Directory under which ``flows/`` is created
        """
        self.output_root = Path(output_root)
        self.flows_dir = self.output_root / "flows"

    def integration_dir(self, integration_key: str) -> Path:
        """Directory holding the flow files of one integration."""
        return self.flows_dir / integration_key

    def path_for(self, document: FlowDocument, integration_key: str) -> Path:
        """File path a document is written to."""
        return self.integration_dir(integration_key) / f"{document.key}{FLOW_FILE_SUFFIX}"

    def ensure_dir(self, integration_key: str) -> Path:
        """
        Create the integration directory if needed.

        Raises:
            StoreError: If the directory cannot be created
        """
        target = self.integration_dir(integration_key)
        try:
            target.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StoreError(
                f"Failed to create flow directory: {e}",
                path=str(target),
            ) from e
        return target

    def write(self, document: FlowDocument, integration_key: str) -> Path:
        """
        Write a flow document to disk, replacing any previous content.

        Args:
            document: Flow document to write
            integration_key: Key of the owning integration

        Returns:
            Path to the written file

        Raises:
            StoreError: If the file cannot be written
        """
        target_dir = self.ensure_dir(integration_key)
        target = self.path_for(document, integration_key)
        content = render_flow_yaml(document)
        tmp_path: Path | None = None

        try:
            with tempfile.NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                dir=target_dir,
                delete=False,
                suffix=".tmp",
            ) as tmp:
                tmp_path = Path(tmp.name)
                tmp.write(content)
                tmp.flush()

            tmp_path.replace(target)
        except OSError as e:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
            raise StoreError(
                f"Failed to write flow file: {e}",
                path=str(target),
                flow_key=document.key,
            ) from e

        return target

    @classmethod
    def default(cls) -> "FlowStore":
        """
        Create a store rooted at ./dist relative to the current directory.

        Returns:
            FlowStore for ./dist
        """
        return cls(Path.cwd() / "dist")
