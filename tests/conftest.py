"""Shared fixtures: project root, sample paths and in-memory diagram models."""

from pathlib import Path

import pytest

from subproc2bpmn.io.registry import ElementRegistry, RegistryElement
from subproc2bpmn.logger import ExtractionLogger
from subproc2bpmn.model.process import Flow, Node

# Repository root (subproc2bpmn/)
ROOT_DIR = Path(__file__).resolve().parent.parent


@pytest.fixture
def sample_dir() -> Path:
    """Path to the sample/ directory."""
    return ROOT_DIR / "sample"


@pytest.fixture
def sample_bpmn_path(sample_dir: Path) -> Path:
    """Path to sample/sample.bpmn."""
    path = sample_dir / "sample.bpmn"
    if not path.exists():
        pytest.skip(f"Sample file not found: {path}")
    return path


@pytest.fixture
def logger() -> ExtractionLogger:
    """Logger with an empty warning list."""
    return ExtractionLogger()


@pytest.fixture
def scenario_registry() -> ElementRegistry:
    """
    SP1 containing Task A (t1) and Task B (t2) joined by f1.

    t1 at (500,500,100,80), t2 at (700,500,100,80), f1 not routed.
    """
    t1 = Node(id="t1", type="bpmn:Task", name="Task A", outgoing=["f1"])
    t2 = Node(id="t2", type="bpmn:Task", name="Task B", incoming=["f1"])
    f1 = Flow(id="f1", source_ref=t1, target_ref=t2)
    sp1 = Node(id="SP1", type="bpmn:SubProcess", name="Sub One", children=[t1, t2, f1])

    registry = ElementRegistry()
    registry.add(RegistryElement("SP1", sp1.type, sp1, "Process_1", 450, 450, 450, 200))
    registry.add(RegistryElement("t1", t1.type, t1, "SP1", 500, 500, 100, 80))
    registry.add(RegistryElement("t2", t2.type, t2, "SP1", 700, 500, 100, 80))
    registry.add(RegistryElement("f1", f1.type, f1, "SP1", waypoints=[]))
    return registry
