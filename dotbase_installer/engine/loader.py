"""SpecLoader - loads and validates YAML question flows."""

import yaml
from pathlib import Path
from typing import Optional
from .graph import QuestionGraph
from .schema import QuestionFlow

DEFAULT_FLOWS_PATH = Path(__file__).resolve().parent.parent / "flows"


class SpecLoader:
    """
    Loads question flows from YAML files.

    Validates structure using Pydantic models and question ordering
    using QuestionGraph.
    """

    def __init__(self, base_path: Optional[Path] = None):
        """
        Initialize loader.

        Args:
            base_path: Directory holding <flow>.yaml files (default: bundled flows)
        """
        if base_path is None:
            base_path = DEFAULT_FLOWS_PATH
        self.base_path = Path(base_path)

    def load_flow(self, flow_name: str) -> QuestionFlow:
        """
        Load a flow definition from YAML.

        Args:
            flow_name: Name of flow (e.g., 'install')

        Returns:
            Validated QuestionFlow instance

        Raises:
            FileNotFoundError: If flow file doesn't exist
            ValidationError: If YAML doesn't match schema
        """
        flow_path = self.base_path / f"{flow_name}.yaml"

        if not flow_path.exists():
            raise FileNotFoundError(f"Flow not found: {flow_path}")

        with open(flow_path, 'r') as f:
            data = yaml.safe_load(f)

        return QuestionFlow(**data)

    def load_graph(self, flow_name: str) -> QuestionGraph:
        """
        Load a flow and build its question graph.

        Raises:
            QuestionOrderError: If a condition references a later question
        """
        return QuestionGraph(self.load_flow(flow_name).questions)
